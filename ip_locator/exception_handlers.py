from http import HTTPStatus

from fastapi import Request, status
from fastapi.responses import JSONResponse

from ip_locator.errors import GeoLookupError
from ip_locator.logger import logger
from ip_locator.models.response_models import ErrorResponse

LOOKUP_FAILED_TITLE = "failed to lookup ip geolocation"


def _error_response(status_code: int, title: str, detail: str) -> JSONResponse:
    status_line = f"{status_code} {HTTPStatus(status_code).phrase}"
    body = ErrorResponse(status=status_line, title=title, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def lookup_error_handler(request: Request, exc: GeoLookupError) -> JSONResponse:
    """Map every lookup failure (transport, decode, provider rejection) to the same 500 response."""
    logger.error(
        f"Geolocation lookup failed path={request.url.path} method={request.method} "
        f"error_type={type(exc).__name__} error={exc}"
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, LOOKUP_FAILED_TITLE, str(exc))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors to return a structured 500 response."""
    logger.exception(
        "Unhandled exception while processing request: "
        f"{repr(exc)} path={request.url.path} method={request.method}"
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal error",
        "An unexpected error occurred while processing the request.",
    )
