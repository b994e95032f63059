from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error body returned by the HTTP API for any failed lookup."""

    status: str
    title: str
    detail: str
