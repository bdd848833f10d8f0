"""Rebuild per-symbol share counts from the trade log."""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Mapping, Sequence, Tuple

from .models import HoldingSnapshot, Trade

logger = logging.getLogger(__name__)


def apply_trade(holdings: Mapping[str, float], trade: Trade) -> HoldingSnapshot:
    """Return a new snapshot with ``trade`` applied.

    Selling more shares than are held leaves the position at zero.
    """

    updated = dict(holdings)
    current = updated.get(trade.symbol, 0.0)
    shares = current + trade.signed_shares()
    if shares < 0:
        logger.debug(
            "Oversell of %s on %s (held %s, sold %s); clamping to zero",
            trade.symbol,
            trade.date,
            current,
            trade.shares,
        )
        shares = 0.0
    updated[trade.symbol] = shares
    return updated


def apply_trades(holdings: Mapping[str, float], trades: Iterable[Trade]) -> HoldingSnapshot:
    snapshot = dict(holdings)
    for trade in trades:
        snapshot = apply_trade(snapshot, trade)
    return snapshot


def replay_holdings(trades: Sequence[Trade], cutoff: date) -> HoldingSnapshot:
    """Holdings as of the end of ``cutoff``; ``trades`` must be date-sorted."""

    return apply_trades({}, (trade for trade in trades if trade.date <= cutoff))


def split_trades(trades: Sequence[Trade], start: date) -> Tuple[List[Trade], List[Trade]]:
    """Partition sorted trades into those on/before ``start`` and those after."""

    before = [trade for trade in trades if trade.date <= start]
    in_period = [trade for trade in trades if trade.date > start]
    return before, in_period


__all__ = ["apply_trade", "apply_trades", "replay_holdings", "split_trades"]
