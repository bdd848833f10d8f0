"""Account performance against the benchmark.

Loads the account's ledger, plans which price series are needed, fans the
price requests out concurrently and hands everything to the pure engine in
:mod:`folio`. Price provider failures are not caught here: without prices the
computation cannot proceed, so they reach the caller unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Awaitable, Callable
from zoneinfo import ZoneInfo

from folio import PerformanceResult, Period, build_performance, plan_fetch
from folio.models import Dividend, Trade
from folio_api.config import AppSettings, get_settings
from folio_api.core.telemetry import PerformanceMetrics, get_tracer
from folio_api.providers.base import HistoricalPriceSource

from . import ledger
from .market_data import fetch_price_series, get_historical_prices

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

STOCK_ACCOUNT_TYPE = "stock"


class AccountNotFoundError(LookupError):
    """Raised when the ledger has no such account for the caller."""


class NotStockAccountError(ValueError):
    """Raised when performance is requested for a non-brokerage account."""


@dataclass
class LedgerGateway:
    """Async callables used to read an account's ledger."""

    fetch_account: Callable[[int, str], Awaitable[dict[str, Any]]] = ledger.fetch_account
    list_holdings: Callable[[int, str], Awaitable[list[dict[str, Any]]]] = ledger.list_holdings
    list_trades: Callable[[int, str], Awaitable[list[Trade]]] = ledger.list_trades
    list_dividends: Callable[[int, str], Awaitable[list[Dividend]]] = ledger.list_dividends


def today_in(timezone: str) -> date:
    return datetime.now(ZoneInfo(timezone)).date()


class PerformanceService:
    def __init__(
        self,
        *,
        settings: AppSettings | None = None,
        gateway: LedgerGateway | None = None,
        price_source: HistoricalPriceSource | None = None,
        metrics: PerformanceMetrics | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.gateway = gateway or LedgerGateway()
        self.price_source = price_source or get_historical_prices
        self.metrics = metrics or PerformanceMetrics()

    async def _load_account(self, account_id: int, user_id: str) -> dict[str, Any]:
        try:
            account = await self.gateway.fetch_account(account_id, user_id)
        except ledger.LedgerServiceError as exc:
            if exc.status_code == 404:
                raise AccountNotFoundError(f"Account {account_id} not found") from exc
            raise
        if not account:
            raise AccountNotFoundError(f"Account {account_id} not found")
        return account

    async def compute(
        self,
        account_id: int,
        user_id: str,
        period: Period,
        *,
        today: date | None = None,
    ) -> PerformanceResult:
        """Return the account's time-weighted performance for ``period``."""

        with self.metrics.timed(period.value) as outcome:
            result = await self._compute(account_id, user_id, period, today or today_in(self.settings.timezone))
            if result.is_empty:
                outcome["outcome"] = "empty"
        return result

    async def _compute(self, account_id: int, user_id: str, period: Period, today: date) -> PerformanceResult:
        account = await self._load_account(account_id, user_id)
        if account.get("type") != STOCK_ACCOUNT_TYPE:
            raise NotStockAccountError(f"Account {account_id} is not a stock account")

        # Closed positions are still listed, so an empty list means nothing was ever held.
        holdings = await self.gateway.list_holdings(account_id, user_id)
        if not holdings:
            return PerformanceResult.empty()

        trades = await self.gateway.list_trades(account_id, user_id)
        if not trades:
            return PerformanceResult.empty()

        plan = plan_fetch(trades, period, today, self.settings.benchmark_symbol)
        if not plan.has_symbols:
            return PerformanceResult.empty()

        with tracer.start_as_current_span("performance.compute") as span:
            span.set_attribute("folio.account_id", account_id)
            span.set_attribute("folio.period", period.value)
            span.set_attribute("folio.symbol_count", len(plan.symbols))
            self.metrics.price_series.add(len(plan.fetch_symbols), {"period": period.value})
            series, dividends = await asyncio.gather(
                fetch_price_series(plan.fetch_symbols, plan.start, plan.end, source=self.price_source),
                self.gateway.list_dividends(account_id, user_id),
            )
            result = build_performance(plan, series, dividends)
            span.set_attribute("folio.point_count", len(result.points))

        logger.info(
            "Computed %s performance for account %s: %d symbols, %d points, %d events",
            period.value,
            account_id,
            len(plan.symbols),
            len(result.points),
            len(result.events),
        )
        return result


def get_performance_service() -> PerformanceService:
    return PerformanceService()


__all__ = [
    "AccountNotFoundError",
    "NotStockAccountError",
    "LedgerGateway",
    "PerformanceService",
    "get_performance_service",
    "today_in",
]
