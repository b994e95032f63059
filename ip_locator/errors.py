class GeoLookupError(Exception):
    """Base error for a failed IP geolocation lookup."""


class TransportError(GeoLookupError):
    """Raised when the request to the geolocation provider could not be completed (DNS, connection, timeout)."""


class DecodeError(GeoLookupError):
    """Raised when the provider response body could not be parsed into the expected schema."""


class ProviderRejectedError(GeoLookupError):
    """Raised when the provider answered well-formed JSON with a non-success status.

    The provider's status, message and echoed query are carried verbatim.
    """

    def __init__(self, status: str, message: str, query: str) -> None:
        self.status = status
        self.message = message
        self.query = query
        super().__init__(status, message, query)

    def __str__(self) -> str:
        return f"provider rejected lookup: status='{self.status}', message='{self.message}', query='{self.query}'"
