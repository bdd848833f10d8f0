"""Trade and dividend markers for the rendered timeline."""
from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Sequence

from .models import Dividend, Event, EventType, Trade, TradeType


def _trade_event(trade: Trade) -> Event:
    event_type = EventType.BUY if trade.type is TradeType.BUY else EventType.SELL
    return Event(
        date=trade.date,
        type=event_type,
        symbol=trade.symbol,
        shares=float(trade.shares),
        price=float(trade.price),
    )


def _dividend_event(dividend: Dividend) -> Event:
    return Event(
        date=dividend.ex_date,
        type=EventType.DIVIDEND,
        symbol=dividend.symbol,
        amount=float(dividend.net_amount),
    )


def collect_events(
    trades: Iterable[Trade],
    dividends: Iterable[Dividend],
    start: date,
    end: date,
) -> List[Event]:
    """Events dated within ``[start, end]``, trades before dividends on a shared date."""

    trade_events = [_trade_event(t) for t in trades if start <= t.date <= end]
    dividend_events = [_dividend_event(d) for d in dividends if start <= d.ex_date <= end]
    return sorted(trade_events + dividend_events, key=lambda event: event.date)


def group_events(events: Iterable[Event], dates: Sequence[date]) -> Dict[date, List[Event]]:
    """Map every timeline date to its events; dates without any get an empty list."""

    grouped: Dict[date, List[Event]] = {day: [] for day in dates}
    for event in events:
        if event.date in grouped:
            grouped[event.date].append(event)
    return grouped


__all__ = ["collect_events", "group_events"]
