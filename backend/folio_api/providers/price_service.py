"""Client helpers for the historical price bridge service."""

from __future__ import annotations

from datetime import date
from typing import Any

import httpx

from folio_api.config import get_settings

from .base import Interval, PriceProviderError


class PriceServiceError(PriceProviderError):
    """Raised when the price bridge returns an error."""


async def fetch_price_bars(
    symbol: str,
    *,
    start: date,
    end: date,
    interval: Interval = "1d",
    base_url: str | None = None,
    timeout_seconds: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[dict[str, Any]]:
    """Fetch raw bar payloads for ``symbol`` between ``start`` and ``end``."""

    settings = get_settings()
    url_base = (base_url or settings.price_service_url or "").rstrip("/")
    if not url_base:
        raise PriceServiceError("Price service URL is not configured")
    url = f"{url_base}/prices"
    params: dict[str, Any] = {
        "start": start.isoformat(),
        "end": end.isoformat(),
        "interval": interval,
    }
    timeout = timeout_seconds or settings.price_service_timeout_seconds
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.post(url, params=params, json={"symbol": symbol})
    except httpx.HTTPError as exc:  # pragma: no cover - network failure handling
        raise PriceServiceError(f"Failed to reach price service: {exc}") from exc

    if response.status_code >= 400:
        detail: Any
        try:
            payload = response.json()
            detail = payload.get("detail", payload)
        except ValueError:
            detail = response.text
        raise PriceServiceError(f"Price service error {response.status_code} for {symbol}: {detail}")

    try:
        payload = response.json()
    except ValueError as exc:
        raise PriceServiceError("Price service returned invalid JSON payload") from exc

    bars: Any
    if isinstance(payload, dict):
        bars = payload.get("bars", [])
    else:
        bars = payload

    if not isinstance(bars, list):
        raise PriceServiceError("Price service response is not a list of bars")
    return bars


__all__ = ["PriceServiceError", "fetch_price_bars"]
