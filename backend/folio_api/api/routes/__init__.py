"""Route registration helpers."""

from __future__ import annotations

from fastapi import APIRouter

from .performance import router as performance_router

api_router = APIRouter()
api_router.include_router(performance_router, prefix="/accounts", tags=["performance"])

__all__ = ["api_router"]
