"""Ledger client tests."""

from __future__ import annotations

from datetime import date

import httpx
import pytest

from folio.models import TradeType
from folio_api.services import ledger
from folio_api.services.ledger import LedgerServiceError, parse_dividends, parse_trades


def test_parse_trades_orders_by_date_then_id():
    rows = [
        {"id": 7, "date": "2024-02-01", "symbol": "aapl", "type": "SELL", "shares": -4, "price": 190},
        {"id": 3, "date": "2024-01-02", "symbol": "AAPL", "type": "buy", "shares": 10, "price": 185.5},
        {"id": 5, "date": "2024-02-01T00:00:00", "symbol": "msft", "type": "buy", "shares": 2, "price": 400},
        {"id": 4, "date": "2024-01-15", "symbol": "AAPL", "type": "dividend", "shares": 0},
    ]
    trades = parse_trades(rows)
    assert [(t.date, t.symbol, t.type) for t in trades] == [
        (date(2024, 1, 2), "AAPL", TradeType.BUY),
        (date(2024, 2, 1), "MSFT", TradeType.BUY),
        (date(2024, 2, 1), "AAPL", TradeType.SELL),
    ]
    assert trades[2].shares == 4


def test_parse_dividends_normalises_symbols():
    dividends = parse_dividends([{"ex_date": "2024-02-09", "symbol": " aapl ", "net_amount": "1.44"}])
    assert dividends[0].symbol == "AAPL"
    assert dividends[0].ex_date == date(2024, 2, 9)
    assert dividends[0].net_amount == pytest.approx(1.44)


def _patch_transport(monkeypatch, handler) -> None:
    transport = httpx.MockTransport(handler)
    original = ledger._request

    async def request_with_transport(method, path, *, user_id=None):
        return await original(method, path, user_id=user_id, transport=transport)

    monkeypatch.setattr(ledger, "_request", request_with_transport)


async def test_list_trades_sends_user_header(monkeypatch):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=[{"id": 1, "date": "2024-01-02", "symbol": "AAPL", "type": "buy", "shares": 3, "price": 180}],
        )

    _patch_transport(monkeypatch, handler)
    trades = await ledger.list_trades(12, "user-1")
    assert seen[0].url.path == "/accounts/12/transactions"
    assert seen[0].headers["X-User-Id"] == "user-1"
    assert trades[0].shares == 3


async def test_error_status_carries_detail(monkeypatch):
    _patch_transport(monkeypatch, lambda request: httpx.Response(404, json={"detail": "Account not found"}))
    with pytest.raises(LedgerServiceError) as excinfo:
        await ledger.fetch_account(99, "user-1")
    assert excinfo.value.status_code == 404
    assert excinfo.value.detail == "Account not found"


async def test_unreachable_ledger_maps_to_bad_gateway(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    _patch_transport(monkeypatch, handler)
    with pytest.raises(LedgerServiceError) as excinfo:
        await ledger.list_holdings(1, "user-1")
    assert excinfo.value.status_code == 502
