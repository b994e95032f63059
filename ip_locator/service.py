from ip_locator.cache import LookupCache
from ip_locator.clients.ip_api_com_client import IpApiCom
from ip_locator.config import Settings
from ip_locator.logger import logger
from ip_locator.models.common import GeoLocation

LOOPBACK_IPV4 = "127.0.0.1"


class LookupService:
    """Single entry point for resolving an IP address into a GeoLocation."""

    def __init__(self, cache: LookupCache) -> None:
        self._cache = cache

    async def resolve(self, requested_ip: str) -> GeoLocation:
        """Resolve `requested_ip`, going through the lookup cache.

        The IPv4 loopback address means nothing to the provider, so it is looked
        up as "" instead, which makes the provider resolve the caller's own public
        IP. Loopback and "" therefore share one cache entry.
        """
        key = "" if requested_ip == LOOPBACK_IPV4 else requested_ip
        logger.info(f"Fetching geolocation data for ip={requested_ip!r} key={key!r}")
        return await self._cache.get_or_fetch(key)


def build_lookup_service(settings: Settings) -> LookupService:
    client = IpApiCom(
        base_url=settings.provider_base_url,
        path_prefix=settings.provider_path_prefix,
        timeout_seconds=settings.provider_timeout_seconds,
    )
    cache = LookupCache(
        client,
        freshness_window=settings.cache_freshness_seconds,
        max_entries=settings.cache_max_entries,
    )
    return LookupService(cache)
