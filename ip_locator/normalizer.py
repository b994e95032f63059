from ip_locator.errors import ProviderRejectedError
from ip_locator.models.common import GeoLocation
from ip_locator.models.provider_models import RawProviderResponse


def normalize(raw: RawProviderResponse) -> GeoLocation:
    """Classify a provider payload and map a successful one into a GeoLocation.

    Any status other than "success" (an empty one included) is a rejection, and
    the provider's status, message and query are passed on untranslated.
    """
    if not raw.is_success():
        raise ProviderRejectedError(raw.status, raw.message, raw.query)

    return GeoLocation(
        ip=raw.query,
        country_code=raw.country_code,
        country_name=raw.country,
        region_name=raw.region_name,
        city=raw.city,
        zip_code=raw.zip,
        time_zone=raw.timezone,
        latitude=raw.lat,
        longitude=raw.lon,
    )
