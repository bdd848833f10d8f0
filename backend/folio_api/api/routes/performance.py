"""Account performance endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from folio import DEFAULT_PERIOD, Period
from folio_api.api.dependencies import RequestContext, get_request_context
from folio_api.providers.base import PriceProviderError
from folio_api.schemas import PerformanceResponse
from folio_api.services.ledger import LedgerServiceError
from folio_api.services.performance import (
    AccountNotFoundError,
    NotStockAccountError,
    PerformanceService,
    get_performance_service,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/{account_id}/performance",
    response_model=PerformanceResponse,
    response_model_exclude_none=True,
)
async def get_account_performance(
    account_id: int = Path(..., ge=1),
    period: Period = Query(DEFAULT_PERIOD, description="Reporting window"),
    context: RequestContext = Depends(get_request_context),
    service: PerformanceService = Depends(get_performance_service),
) -> PerformanceResponse:
    """Time-weighted portfolio performance compared with the benchmark index."""

    try:
        result = await service.compute(account_id, context.user_id, period)
    except AccountNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found") from exc
    except NotStockAccountError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Not a stock account") from exc
    except LedgerServiceError as exc:
        logger.warning("Ledger lookup failed for account %s: %s", account_id, exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.detail) from exc
    except PriceProviderError as exc:
        logger.exception("Error fetching performance data for account %s", account_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch performance data",
        ) from exc
    return PerformanceResponse.from_result(result)


__all__ = ["router"]
