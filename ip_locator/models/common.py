from pydantic import BaseModel, ConfigDict


class GeoLocation(BaseModel):
    """Geolocation record for a single IP address.

    Only ever built from a successful provider response, so every field is
    required. Coordinates are carried through exactly as the provider sent them.
    """

    model_config = ConfigDict(frozen=True)

    ip: str
    country_code: str
    country_name: str
    region_name: str
    city: str
    zip_code: str
    time_zone: str
    latitude: float
    longitude: float
