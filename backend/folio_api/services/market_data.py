"""Market data helpers for loading close series."""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any, Iterable, Mapping

import pandas as pd

from folio.models import PricePoint
from folio_api.config import AppSettings, get_settings
from folio_api.providers.alpha_vantage import (
    SERIES_FUNCTIONS,
    AlphaVantageClient,
    get_alpha_vantage_client,
)
from folio_api.providers.base import HistoricalPriceSource, Interval
from folio_api.providers.price_service import fetch_price_bars

logger = logging.getLogger(__name__)


def _frame_to_points(df: pd.DataFrame, start: date, end: date) -> list[PricePoint]:
    if df.empty:
        return []
    df = df[~df.index.duplicated(keep="last")].sort_index()
    df = df.loc[pd.Timestamp(start) : pd.Timestamp(end)]
    return [PricePoint(date=ts.date(), close=float(close)) for ts, close in df["Close"].items()]


def _parse_series(payload: Mapping[str, Any], series_key: str, start: date, end: date) -> list[PricePoint]:
    series = payload.get(series_key, {})
    rows: list[dict[str, Any]] = []
    for day_str, values in series.items():
        day = pd.to_datetime(day_str, format="%Y-%m-%d", errors="coerce")
        if pd.isna(day):
            continue
        close_value = values.get("4. close")
        if close_value is None:
            continue
        rows.append({"Date": day, "Close": float(close_value)})
    if not rows:
        return []
    df = pd.DataFrame(rows).set_index("Date")
    return _frame_to_points(df, start, end)


def _parse_bars(bars: Iterable[Any], start: date, end: date) -> list[PricePoint]:
    rows: list[dict[str, Any]] = []
    for bar in bars:
        if not isinstance(bar, dict):
            continue
        raw_date = bar.get("date")
        close_value = bar.get("close")
        if raw_date is None or close_value is None:
            continue
        day = pd.to_datetime(raw_date, errors="coerce")
        if pd.isna(day):
            continue
        # Bars may carry a time component or timezone; only the trading day matters.
        rows.append({"Date": pd.Timestamp(day.date()), "Close": float(close_value)})
    if not rows:
        return []
    df = pd.DataFrame(rows).set_index("Date")
    return _frame_to_points(df, start, end)


def _select_output_size(start: date, end: date) -> str:
    return "compact" if (end - start).days <= 120 else "full"


async def _load_alpha_vantage(
    symbol: str,
    start: date,
    end: date,
    interval: Interval,
    client: AlphaVantageClient,
) -> list[PricePoint]:
    _, series_key = SERIES_FUNCTIONS[interval]
    payload = await client.time_series(symbol, interval=interval, output=_select_output_size(start, end))
    return _parse_series(payload, series_key, start, end)


async def get_historical_prices(
    symbol: str,
    start: date,
    end: date,
    interval: Interval = "1d",
    *,
    settings: AppSettings | None = None,
    client: AlphaVantageClient | None = None,
) -> list[PricePoint]:
    """Return closes for ``symbol`` within ``[start, end]`` from the configured provider.

    Gaps (holidays, delistings) are returned as-is. Provider failures raise a
    ``PriceProviderError`` subclass.
    """

    settings = settings or get_settings()
    if settings.price_provider == "price_service":
        bars = await fetch_price_bars(
            symbol,
            start=start,
            end=end,
            interval=interval,
            base_url=settings.price_service_url,
            timeout_seconds=settings.price_service_timeout_seconds,
        )
        points = _parse_bars(bars, start, end)
    else:
        points = await _load_alpha_vantage(symbol, start, end, interval, client or get_alpha_vantage_client())
    logger.debug("Loaded %d closes for %s between %s and %s", len(points), symbol, start, end)
    return points


async def fetch_price_series(
    symbols: Iterable[str],
    start: date,
    end: date,
    *,
    source: HistoricalPriceSource = get_historical_prices,
    interval: Interval = "1d",
) -> dict[str, list[PricePoint]]:
    """Fetch every symbol concurrently; the first failure propagates to the caller."""

    ordered = list(dict.fromkeys(symbols))
    results = await asyncio.gather(*(source(symbol, start, end, interval) for symbol in ordered))
    return dict(zip(ordered, results))


__all__ = ["get_historical_prices", "fetch_price_series"]
