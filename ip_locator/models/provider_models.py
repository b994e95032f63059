from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

SUCCESS_STATUS = "success"


class RawProviderResponse(BaseModel):
    """ip-api.com JSON payload, field-for-field.

    Every field falls back to an empty value when absent (or null), so a partial
    payload still parses and is classified by its `status` instead.
    See https://ip-api.com/docs/api:json for the wire schema.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    status: str = ""
    message: str = ""
    query: str = ""
    country: str = ""
    country_code: str = Field(default="", alias="countryCode")
    region_name: str = Field(default="", alias="regionName")
    city: str = ""
    zip: str = ""
    timezone: str = ""
    lat: float = 0.0
    lon: float = 0.0

    @field_validator("*", mode="before")
    @classmethod
    def _null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        """Treat an explicit JSON null the same as a missing field."""
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    def is_success(self) -> bool:
        return self.status == SUCCESS_STATUS
