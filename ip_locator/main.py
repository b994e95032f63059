from functools import lru_cache
from typing import Annotated

from fastapi import Depends, FastAPI, Request, status

from ip_locator.config import get_settings
from ip_locator.errors import GeoLookupError
from ip_locator.exception_handlers import lookup_error_handler, unhandled_exception_handler
from ip_locator.logger import logger
from ip_locator.models.common import GeoLocation
from ip_locator.models.response_models import ErrorResponse
from ip_locator.service import LookupService, build_lookup_service

app = FastAPI(
    title="IP Locator",
    version="0.1.0",
    description="Resolves the calling client's IP address into a geolocation record.",
)
logger.info("Started IP Locator")


@lru_cache
def get_lookup_service() -> LookupService:
    """Dependency providing the process-wide LookupService, so its cache outlives single requests."""
    return build_lookup_service(get_settings())


app.add_exception_handler(GeoLookupError, lookup_error_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.get(
    "/ip",
    response_model=GeoLocation,
    status_code=status.HTTP_200_OK,
    tags=["ip"],
    summary="Look up geolocation information for the calling client's IP.",
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}},
)
async def ip_lookup(
    request: Request,
    lookup_service: Annotated[LookupService, Depends(get_lookup_service)],
) -> GeoLocation:
    """Resolve the connecting client's address.

    A client connecting over loopback is resolved as the server's own public IP.
    """
    client_ip = request.client.host if request.client else ""
    return await lookup_service.resolve(client_ip)
