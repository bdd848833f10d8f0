"""Benchmark normalisation and event annotation tests."""

from __future__ import annotations

from datetime import date

import pytest

from folio.benchmark import normalize_benchmark, normalize_series
from folio.events import collect_events, group_events
from folio.models import Dividend, EventType, Trade, TradeType


def test_first_benchmark_point_is_zero():
    changes = normalize_benchmark([4800.0, 4896.0, 4560.0])
    assert changes[0] == 0.0
    assert changes[1] == pytest.approx(2.0)
    assert changes[2] == pytest.approx(-5.0)


def test_zero_first_value_yields_flat_series():
    assert normalize_benchmark([0.0, 10.0]) == [0.0, 0.0]
    assert normalize_benchmark([]) == []


def test_normalize_series_keeps_dates_and_values():
    rows = normalize_series([(date(2024, 1, 2), 50.0), (date(2024, 1, 3), 55.0)])
    assert rows[0] == (date(2024, 1, 2), 50.0, 0.0)
    assert rows[1][2] == pytest.approx(10.0)


def build_history():
    trades = [
        Trade(date=date(2024, 1, 2), symbol="AAPL", type=TradeType.BUY, shares=10, price=185.0),
        Trade(date=date(2024, 2, 9), symbol="AAPL", type=TradeType.SELL, shares=4, price=188.5),
        Trade(date=date(2024, 4, 1), symbol="MSFT", type=TradeType.BUY, shares=3, price=420.0),
    ]
    dividends = [
        Dividend(ex_date=date(2024, 2, 9), symbol="AAPL", net_amount=1.44),
        Dividend(ex_date=date(2023, 11, 10), symbol="AAPL", net_amount=2.4),
    ]
    return trades, dividends


def test_collect_events_closed_interval_and_order():
    trades, dividends = build_history()
    events = collect_events(trades, dividends, date(2024, 1, 2), date(2024, 2, 9))
    assert [(e.date, e.type) for e in events] == [
        (date(2024, 1, 2), EventType.BUY),
        (date(2024, 2, 9), EventType.SELL),
        (date(2024, 2, 9), EventType.DIVIDEND),
    ]
    sell = events[1]
    assert sell.shares == 4 and sell.price == 188.5 and sell.amount is None
    dividend = events[2]
    assert dividend.amount == pytest.approx(1.44) and dividend.shares is None


def test_group_events_has_key_for_every_date():
    trades, dividends = build_history()
    events = collect_events(trades, dividends, date(2024, 1, 1), date(2024, 12, 31))
    days = [date(2024, 1, 2), date(2024, 1, 3), date(2024, 2, 9)]
    grouped = group_events(events, days)
    assert list(grouped) == days
    assert len(grouped[date(2024, 1, 2)]) == 1
    assert grouped[date(2024, 1, 3)] == []
    assert [e.type for e in grouped[date(2024, 2, 9)]] == [EventType.SELL, EventType.DIVIDEND]
