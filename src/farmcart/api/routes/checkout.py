"""API routes for checkout totals and delivery options."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...errors import UnserviceableCartError, ZoneOverlapError
from ...schemas.cart import AggregationResponse, UnserviceableItemModel
from ...schemas.catalog import farms_to_domain
from ...schemas.checkout import CheckoutRequest, CheckoutResponse, DeliveryOptionModel, TotalsModel
from ...services.checkout.options import default_delivery_options
from ...services.checkout.service import prepare_checkout

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/checkout", tags=["checkout"])


@router.get("/delivery-options", response_model=list[DeliveryOptionModel], status_code=status.HTTP_200_OK)
def list_delivery_options() -> list[DeliveryOptionModel]:
    return [DeliveryOptionModel.from_domain(option) for option in default_delivery_options()]


@router.post("/totals", response_model=CheckoutResponse, status_code=status.HTTP_200_OK)
def checkout_totals(payload: CheckoutRequest) -> CheckoutResponse:
    """Compute order totals; refuses while any item cannot be delivered."""
    try:
        summary = prepare_checkout(
            [item.to_domain() for item in payload.items],
            farms_to_domain(payload.farms),
            payload.location_key,
            payload.delivery_option_id,
            payload.tax_rate,
        )
    except UnserviceableCartError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": str(exc),
                "unserviceable": [
                    UnserviceableItemModel.from_domain(entry).model_dump(mode="json") for entry in exc.items
                ],
            },
        ) from exc
    except ZoneOverlapError as exc:
        logger.error("Rejected checkout due to malformed zone data: %s", exc)
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return CheckoutResponse(
        delivery_option=DeliveryOptionModel.from_domain(summary.delivery_option),
        totals=TotalsModel.from_domain(summary.totals),
        grouping=AggregationResponse.from_result(summary.aggregation),
    )
