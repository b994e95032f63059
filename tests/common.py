import asyncio
import json
from typing import Any

import httpx

from ip_locator.clients.base import BaseGeoProviderClient
from ip_locator.errors import TransportError
from ip_locator.models.provider_models import RawProviderResponse

SAMPLE_SUCCESS_PAYLOAD: dict[str, Any] = {
    "status": "success",
    "country": "Norway",
    "countryCode": "NO",
    "region": "50",
    "regionName": "Trøndelag",
    "city": "Halsanaustan",
    "zip": "6680",
    "lat": 63.0913,
    "lon": 8.2362,
    "timezone": "Europe/Oslo",
    "isp": "GLOBALCONNECT",
    "org": "Svorka FTTH",
    "as": "AS2116 GLOBALCONNECT AS",
    "query": "143.110.98.165",
}
SAMPLE_FAILURE_PAYLOAD: dict[str, Any] = {"status": "fail", "message": "reserved range", "query": "127.0.0.1"}


class MockResponse:
    """Stand-in for httpx.Response; `body` is the raw text that json() parses."""

    def __init__(self, status_code: int, payload: Any = None, body: str | None = None) -> None:
        self.status_code = status_code
        self.text = body if body is not None else json.dumps(payload if payload is not None else {})

    def json(self) -> Any:
        return json.loads(self.text)


class MockAsyncClient:
    """Minimal async context-manager mock for httpx.AsyncClient that records requested URLs."""

    def __init__(self, response: MockResponse, requested_urls: list[str] | None = None) -> None:
        self._response = response
        self.requested_urls = requested_urls if requested_urls is not None else []

    async def __aenter__(self) -> "MockAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str) -> MockResponse:
        self.requested_urls.append(url)
        return self._response


class FailingAsyncClient:
    """Async client whose GET raises a ConnectError to simulate an unreachable provider."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        pass

    async def __aenter__(self) -> "FailingAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str) -> MockResponse:
        raise httpx.ConnectError("Connection refused", request=httpx.Request("GET", url))


class ManualClock:
    """Injectable clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingProviderClient(BaseGeoProviderClient):
    """Provider double that counts fetches and replays scripted outcomes.

    Each outcome is a payload dict (returned as a RawProviderResponse) or an
    exception instance (raised). The last outcome repeats once the script runs out.
    """

    def __init__(self, *outcomes: dict[str, Any] | Exception) -> None:
        self._outcomes = list(outcomes) or [SAMPLE_SUCCESS_PAYLOAD]
        self.calls: list[str] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def fetch(self, query_suffix: str) -> RawProviderResponse:
        index = min(len(self.calls), len(self._outcomes) - 1)
        self.calls.append(query_suffix)
        outcome = self._outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        return RawProviderResponse.model_validate(outcome)


def transport_error() -> TransportError:
    return TransportError("Request to IP provider failed: ConnectError('Connection refused')")


class GatedProviderClient(CountingProviderClient):
    """Counting provider whose fetch parks on `release` until the test opens it.

    `waiting` lists the suffixes currently parked, so a test can observe
    several lookups in flight at once.
    """

    def __init__(self, *outcomes: dict[str, Any] | Exception) -> None:
        super().__init__(*outcomes)
        self.release = asyncio.Event()
        self.waiting: list[str] = []

    async def fetch(self, query_suffix: str) -> RawProviderResponse:
        self.waiting.append(query_suffix)
        try:
            await self.release.wait()
        finally:
            self.waiting.remove(query_suffix)
        return await super().fetch(query_suffix)


async def let_tasks_run(rounds: int = 5) -> None:
    """Yield to the event loop so started tasks advance to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)
