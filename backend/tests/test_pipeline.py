from datetime import date

import pytest

from folio import Dividend, PricePoint, Trade, TradeType, build_performance, plan_fetch
from folio.periods import Period

TODAY = date(2024, 3, 8)
BENCHMARK = "^GSPC"


def _series(rows):
    return [PricePoint(date=d, close=c) for d, c in rows.items()]


def _make_trades():
    return [
        Trade(date=date(2024, 3, 4), symbol="AAPL", type=TradeType.BUY, shares=10, price=100.0),
        Trade(date=date(2024, 3, 6), symbol="AAPL", type=TradeType.SELL, shares=5, price=120.0),
    ]


def _make_prices():
    return {
        "AAPL": _series(
            {
                date(2024, 3, 4): 100.0,
                date(2024, 3, 5): 110.0,
                date(2024, 3, 6): 120.0,
                date(2024, 3, 8): 130.0,
            }
        ),
        BENCHMARK: _series(
            {
                date(2024, 3, 4): 5000.0,
                date(2024, 3, 5): 5050.0,
                date(2024, 3, 6): 5100.0,
                date(2024, 3, 7): 5150.0,
                date(2024, 3, 8): 4950.0,
            }
        ),
    }


def _build(period=Period.ONE_WEEK, dividends=()):
    plan = plan_fetch(_make_trades(), period, TODAY, BENCHMARK)
    return build_performance(plan, _make_prices(), dividends)


def test_performance_matches_chained_sub_periods():
    result = _build()
    dates = [p.date for p in result.points]
    # 2024-03-07 has no AAPL close, so it is not admissible.
    assert dates == [date(2024, 3, 4), date(2024, 3, 5), date(2024, 3, 6), date(2024, 3, 8)]
    assert result.points[-1].change_percent == pytest.approx(30.0)
    assert result.points[-1].portfolio_value == pytest.approx(650.0)


def test_benchmark_restricted_to_admissible_dates():
    result = _build()
    assert result.points[0].benchmark_change_percent == 0.0
    assert result.points[0].benchmark_value == 5000.0
    assert result.points[-1].benchmark_change_percent == pytest.approx(-1.0)
    assert all(p.date != date(2024, 3, 7) for p in result.points)


def test_events_attached_to_matching_points():
    dividends = [
        Dividend(ex_date=date(2024, 3, 5), symbol="AAPL", net_amount=2.4),
        Dividend(ex_date=date(2024, 2, 9), symbol="AAPL", net_amount=2.4),
    ]
    result = _build(dividends=dividends)
    by_date = {p.date: p for p in result.points}
    assert [e.type.value for e in by_date[date(2024, 3, 4)].events] == ["buy"]
    assert [e.type.value for e in by_date[date(2024, 3, 5)].events] == ["dividend"]
    assert by_date[date(2024, 3, 8)].events == []
    assert [e.date for e in result.events] == [date(2024, 3, 4), date(2024, 3, 5), date(2024, 3, 6)]


def test_one_day_period_uses_trailing_dates_only():
    result = _build(period=Period.ONE_DAY)
    # Both trades batch onto 03-07, which has no AAPL close, so the walk opens on 03-08.
    assert [p.date for p in result.points] == [date(2024, 3, 8)]
    assert result.points[0].change_percent == pytest.approx(0.0)
    assert result.points[0].benchmark_change_percent == 0.0


def test_repeated_runs_are_identical():
    first = _build()
    second = _build()
    assert first == second


def test_empty_benchmark_gives_empty_result():
    plan = plan_fetch(_make_trades(), Period.ONE_WEEK, TODAY, BENCHMARK)
    prices = _make_prices()
    prices[BENCHMARK] = []
    result = build_performance(plan, prices)
    assert result.is_empty
    assert result.events == []


def test_no_symbols_gives_empty_result():
    trades = [
        Trade(date=date(2020, 1, 2), symbol="AAPL", type=TradeType.BUY, shares=1, price=1.0),
        Trade(date=date(2020, 1, 3), symbol="AAPL", type=TradeType.SELL, shares=1, price=1.0),
    ]
    plan = plan_fetch(trades, Period.ONE_YEAR, TODAY, BENCHMARK)
    assert build_performance(plan, _make_prices()).is_empty
