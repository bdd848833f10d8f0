"""Pydantic schema exports."""

from .performance import (
    BenchmarkPointSchema,
    PerformanceEventSchema,
    PerformanceResponse,
    PortfolioPointSchema,
)

__all__ = [
    "BenchmarkPointSchema",
    "PerformanceEventSchema",
    "PerformanceResponse",
    "PortfolioPointSchema",
]
