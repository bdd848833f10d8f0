"""Pydantic schemas for the account performance endpoint."""

from __future__ import annotations

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field

from folio.models import Event, PerformanceResult


class PerformanceEventSchema(BaseModel):
    date: date
    type: Literal["buy", "sell", "dividend"]
    symbol: str = Field(..., examples=["AAPL"])
    shares: Optional[float] = None
    price: Optional[float] = None
    amount: Optional[float] = None

    @classmethod
    def from_event(cls, event: Event) -> "PerformanceEventSchema":
        return cls(
            date=event.date,
            type=event.type.value,
            symbol=event.symbol,
            shares=event.shares,
            price=event.price,
            amount=event.amount,
        )


class PortfolioPointSchema(BaseModel):
    date: date
    value: float
    change_percent: float = Field(..., alias="changePercent")
    events: list[PerformanceEventSchema] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class BenchmarkPointSchema(BaseModel):
    date: date
    value: float
    change_percent: float = Field(..., alias="changePercent")

    class Config:
        populate_by_name = True


class PerformanceResponse(BaseModel):
    portfolio: list[PortfolioPointSchema] = Field(default_factory=list)
    benchmark: list[BenchmarkPointSchema] = Field(default_factory=list)
    events: list[PerformanceEventSchema] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "portfolio": [
                    {"date": "2024-01-02", "value": 1000.0, "changePercent": 0.0, "events": [
                        {"date": "2024-01-02", "type": "buy", "symbol": "AAPL", "shares": 10, "price": 100.0}
                    ]},
                    {"date": "2024-01-03", "value": 1100.0, "changePercent": 10.0, "events": []},
                ],
                "benchmark": [
                    {"date": "2024-01-02", "value": 4742.83, "changePercent": 0.0},
                    {"date": "2024-01-03", "value": 4704.81, "changePercent": -0.8},
                ],
                "events": [
                    {"date": "2024-01-02", "type": "buy", "symbol": "AAPL", "shares": 10, "price": 100.0}
                ],
            }
        }

    @classmethod
    def from_result(cls, result: PerformanceResult) -> "PerformanceResponse":
        portfolio = [
            PortfolioPointSchema(
                date=point.date,
                value=point.portfolio_value,
                change_percent=point.change_percent,
                events=[PerformanceEventSchema.from_event(event) for event in point.events],
            )
            for point in result.points
        ]
        benchmark = [
            BenchmarkPointSchema(
                date=point.date,
                value=point.benchmark_value,
                change_percent=point.benchmark_change_percent,
            )
            for point in result.points
        ]
        events = [PerformanceEventSchema.from_event(event) for event in result.events]
        return cls(portfolio=portfolio, benchmark=benchmark, events=events)


__all__ = [
    "PerformanceEventSchema",
    "PortfolioPointSchema",
    "BenchmarkPointSchema",
    "PerformanceResponse",
]
