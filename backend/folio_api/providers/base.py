"""Shared types for historical price providers."""

from __future__ import annotations

from datetime import date
from typing import Literal, Protocol

from folio.models import PricePoint

Interval = Literal["1d", "1wk", "1mo"]


class PriceProviderError(RuntimeError):
    """Raised when a price source fails to return a usable series."""


class HistoricalPriceSource(Protocol):
    """Pluggable source of daily closes."""

    async def __call__(
        self,
        symbol: str,
        start: date,
        end: date,
        interval: Interval = "1d",
    ) -> list[PricePoint]:
        ...


__all__ = ["Interval", "PriceProviderError", "HistoricalPriceSource"]
