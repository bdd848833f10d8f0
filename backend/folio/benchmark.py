"""Benchmark percent-change series."""
from __future__ import annotations

from datetime import date
from typing import List, Sequence, Tuple


def normalize_benchmark(values: Sequence[float]) -> List[float]:
    """Percent change of each value relative to the first one."""

    if not values:
        return []
    first = float(values[0])
    if first == 0:
        return [0.0 for _ in values]
    return [0.0] + [(float(value) - first) / first * 100.0 for value in values[1:]]


def normalize_series(series: Sequence[Tuple[date, float]]) -> List[Tuple[date, float, float]]:
    changes = normalize_benchmark([value for _, value in series])
    return [(day, float(value), change) for (day, value), change in zip(series, changes)]


__all__ = ["normalize_benchmark", "normalize_series"]
