"""API routes for cart grouping."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...errors import ZoneOverlapError
from ...schemas.cart import AggregateRequest, AggregationResponse
from ...schemas.catalog import farms_to_domain
from ...services.cart.aggregator import aggregate_cart

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cart", tags=["cart"])


@router.post("/aggregate", response_model=AggregationResponse, status_code=status.HTTP_200_OK)
def aggregate(payload: AggregateRequest) -> AggregationResponse:
    """Group cart items by delivery zone and farm for the target location.

    Items that cannot be delivered are returned under ``unserviceable`` with a
    reason instead of being dropped.
    """
    try:
        result = aggregate_cart(
            [item.to_domain() for item in payload.items],
            farms_to_domain(payload.farms),
            payload.location_key,
        )
    except ZoneOverlapError as exc:
        logger.error("Rejected cart aggregation due to malformed zone data: %s", exc)
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return AggregationResponse.from_result(result)
