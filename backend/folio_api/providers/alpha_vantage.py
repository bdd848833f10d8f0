"""Alpha Vantage client used for historical closes."""

from __future__ import annotations

import asyncio
from collections import deque
from functools import lru_cache
from typing import Any, Deque

import httpx

from folio_api.config import get_settings

from .base import Interval, PriceProviderError

BASE_URL = "https://www.alphavantage.co/query"

_RATE_WINDOW_SECONDS = 60.0

SERIES_FUNCTIONS: dict[str, tuple[str, str]] = {
    "1d": ("TIME_SERIES_DAILY_ADJUSTED", "Time Series (Daily)"),
    "1wk": ("TIME_SERIES_WEEKLY_ADJUSTED", "Weekly Adjusted Time Series"),
    "1mo": ("TIME_SERIES_MONTHLY_ADJUSTED", "Monthly Adjusted Time Series"),
}


class AlphaVantageError(PriceProviderError):
    """Raised when Alpha Vantage returns an error payload."""


class AlphaVantageClient:
    """Throttled Alpha Vantage client with convenience helpers."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        requests_per_minute: int | None = None,
        client: Any | None = None,
        timeout: float = 30.0,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key or settings.alphavantage_api_key
        self.requests_per_minute = max(1, requests_per_minute or settings.alphavantage_requests_per_minute)
        self._client = client or httpx.AsyncClient()
        self._timeout = timeout
        self._calls: Deque[float] = deque()
        self._lock = asyncio.Lock()

    async def _throttle(self) -> None:
        async with self._lock:
            loop = asyncio.get_running_loop()
            now = loop.time()
            while self._calls and now - self._calls[0] >= _RATE_WINDOW_SECONDS:
                self._calls.popleft()
            if len(self._calls) >= self.requests_per_minute:
                await asyncio.sleep(_RATE_WINDOW_SECONDS - (now - self._calls[0]))
                now = loop.time()
                while self._calls and now - self._calls[0] >= _RATE_WINDOW_SECONDS:
                    self._calls.popleft()
            self._calls.append(now)

    async def _get(self, params: dict[str, Any]) -> dict[str, Any]:
        if not self.api_key:
            raise AlphaVantageError("Alpha Vantage API key is not configured")
        await self._throttle()
        query = {**params, "apikey": self.api_key}
        try:
            response = await self._client.get(BASE_URL, params=query, timeout=self._timeout)
        except httpx.HTTPError as exc:  # pragma: no cover - network failure handling
            raise AlphaVantageError(f"Failed to reach Alpha Vantage: {exc}") from exc
        if response.status_code >= 400:
            raise AlphaVantageError(f"Alpha Vantage error {response.status_code}")
        payload = response.json()
        if not isinstance(payload, dict):
            raise AlphaVantageError("Alpha Vantage returned an unexpected payload")
        for key in ("Error Message", "Note", "Information"):
            if key in payload:
                raise AlphaVantageError(str(payload[key]))
        return payload

    async def daily_adjusted(self, symbol: str, *, output: str = "compact") -> dict[str, Any]:
        return await self.time_series(symbol, interval="1d", output=output)

    async def time_series(
        self,
        symbol: str,
        *,
        interval: Interval = "1d",
        output: str = "compact",
    ) -> dict[str, Any]:
        function, _ = SERIES_FUNCTIONS[interval]
        params: dict[str, Any] = {"function": function, "symbol": symbol}
        if interval == "1d":
            params["outputsize"] = output
        return await self._get(params)

    async def aclose(self) -> None:
        await self._client.aclose()


@lru_cache(maxsize=1)
def get_alpha_vantage_client() -> AlphaVantageClient:
    """Return the shared, throttled Alpha Vantage client."""

    return AlphaVantageClient()


__all__ = [
    "AlphaVantageClient",
    "AlphaVantageError",
    "SERIES_FUNCTIONS",
    "get_alpha_vantage_client",
]
