"""Shared FastAPI dependencies."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Header, HTTPException, status


@dataclass
class RequestContext:
    user_id: str


def get_request_context(x_user_id: str | None = Header(default=None)) -> RequestContext:
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing user context")
    return RequestContext(user_id=x_user_id)


__all__ = ["RequestContext", "get_request_context"]
