"""HTTP client for the ledger service owning accounts, trades and dividends."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable

import httpx
from opentelemetry.propagate import inject

from folio.models import Dividend, Trade, TradeType
from folio_api.config import get_settings

logger = logging.getLogger(__name__)


class LedgerServiceError(RuntimeError):
    """Raised when the ledger service answers with an error status."""

    def __init__(self, status_code: int, detail: Any) -> None:
        super().__init__(f"Ledger service error {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


async def _request(
    method: str,
    path: str,
    *,
    user_id: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    settings = get_settings()
    base_url = settings.ledger_service_url.rstrip("/")
    url = f"{base_url}{path}"
    headers: dict[str, str] = {}
    if settings.ledger_service_token:
        headers["X-Internal-Token"] = settings.ledger_service_token
    if user_id:
        headers["X-User-Id"] = str(user_id)
    # Propagate the current trace context to the ledger.
    inject(headers)
    timeout = settings.ledger_service_timeout_seconds
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.request(method, url, headers=headers)
    except httpx.HTTPError as exc:
        raise LedgerServiceError(502, f"Unable to reach ledger service: {exc}") from exc
    if response.status_code >= 400:
        logger.warning("Ledger service error %s for %s", response.status_code, url)
        detail: Any
        try:
            payload = response.json()
            detail = payload.get("detail", payload)
        except ValueError:
            detail = response.text
        raise LedgerServiceError(response.status_code, detail)
    return response.json()


def _parse_date(raw: Any) -> date:
    if isinstance(raw, date):
        return raw
    return date.fromisoformat(str(raw)[:10])


def parse_trades(rows: Iterable[dict[str, Any]]) -> list[Trade]:
    """Turn ledger transaction rows into trades ordered by (date, id)."""

    parsed: list[tuple[date, int, Trade]] = []
    for index, row in enumerate(rows):
        raw_type = str(row.get("type", "")).lower()
        if raw_type not in (TradeType.BUY.value, TradeType.SELL.value):
            logger.debug("Ignoring ledger transaction of type %r", raw_type)
            continue
        trade = Trade(
            date=_parse_date(row["date"]),
            symbol=str(row["symbol"]).strip().upper(),
            type=TradeType(raw_type),
            shares=abs(float(row["shares"])),
            price=float(row.get("price") or 0.0),
        )
        order = int(row["id"]) if row.get("id") is not None else index
        parsed.append((trade.date, order, trade))
    parsed.sort(key=lambda item: (item[0], item[1]))
    return [trade for _, _, trade in parsed]


def parse_dividends(rows: Iterable[dict[str, Any]]) -> list[Dividend]:
    return [
        Dividend(
            ex_date=_parse_date(row["ex_date"]),
            symbol=str(row["symbol"]).strip().upper(),
            net_amount=float(row.get("net_amount") or 0.0),
        )
        for row in rows
    ]


async def fetch_account(account_id: int, user_id: str) -> dict[str, Any]:
    return await _request("GET", f"/accounts/{account_id}", user_id=user_id)


async def list_holdings(account_id: int, user_id: str) -> list[dict[str, Any]]:
    return await _request("GET", f"/accounts/{account_id}/holdings", user_id=user_id)


async def list_trades(account_id: int, user_id: str) -> list[Trade]:
    rows = await _request("GET", f"/accounts/{account_id}/transactions", user_id=user_id)
    return parse_trades(rows)


async def list_dividends(account_id: int, user_id: str) -> list[Dividend]:
    rows = await _request("GET", f"/accounts/{account_id}/dividends", user_id=user_id)
    return parse_dividends(rows)


__all__ = [
    "LedgerServiceError",
    "parse_trades",
    "parse_dividends",
    "fetch_account",
    "list_holdings",
    "list_trades",
    "list_dividends",
]
