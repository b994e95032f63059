from typing import Any

import httpx
from pydantic import ValidationError

from ip_locator.clients.base import BaseGeoProviderClient
from ip_locator.errors import DecodeError, TransportError
from ip_locator.logger import logger
from ip_locator.models.provider_models import RawProviderResponse


class IpApiCom(BaseGeoProviderClient):
    """Client for the http://ip-api.com JSON API.

    ip-api.com answers HTTP 200 for rejected lookups too and reports the outcome
    in the `status` field, so the body is decoded regardless of the HTTP status.
    """

    def __init__(
        self,
        base_url: str = "http://ip-api.com",
        path_prefix: str = "/json/",
        timeout_seconds: float = 5.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._path_prefix = path_prefix
        self._timeout_seconds = timeout_seconds

    def build_url(self, query_suffix: str) -> str:
        return f"{self._base_url}{self._path_prefix}{query_suffix}"

    async def fetch(self, query_suffix: str) -> RawProviderResponse:
        url = self.build_url(query_suffix)
        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
                response = await client.get(url)
        except httpx.RequestError as exc:
            raise TransportError(f"Request to IP provider failed: {repr(exc)}") from exc

        if not 200 <= response.status_code < 300:
            logger.warning(f"IP provider returned HTTP {response.status_code} url={url}")

        return self._decode(self._parse_json(response))

    @staticmethod
    def _parse_json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"Failed to decode IP provider response as JSON: {exc}") from exc

    @staticmethod
    def _decode(data: Any) -> RawProviderResponse:
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object from IP provider, got {type(data).__name__}")
        try:
            return RawProviderResponse.model_validate(data)
        except ValidationError as exc:
            raise DecodeError(f"IP provider response does not match the expected schema: {exc}") from exc
