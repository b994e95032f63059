from abc import ABC, abstractmethod

from ip_locator.models.provider_models import RawProviderResponse


class BaseGeoProviderClient(ABC):
    """Abstract base for geolocation provider clients.

    A client performs exactly one outbound request per call and returns the
    provider payload unclassified. Deciding success or rejection is left to the
    normalizer, and caching to the lookup cache.
    """

    @abstractmethod
    async def fetch(self, query_suffix: str) -> RawProviderResponse:
        """Fetch the raw provider payload for `query_suffix` (an IP, or "" for the caller's own IP).

        Raises TransportError or DecodeError.
        """
        raise NotImplementedError
