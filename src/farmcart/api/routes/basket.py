"""API routes for magic basket generation."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...errors import ZoneOverlapError
from ...models.domain import UserPreferences
from ...schemas.basket import BasketRequest, BasketResponse
from ...schemas.cart import AggregationResponse
from ...schemas.catalog import ProductModel, farms_to_domain
from ...services.cart.store import InMemoryCartStore
from ...services.recommendation.session import MagicBasketSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/basket", tags=["basket"])


@router.post("/generate", response_model=BasketResponse, status_code=status.HTTP_200_OK)
async def generate_basket(payload: BasketRequest) -> BasketResponse:
    """Propose a magic basket. Nothing is committed; the client owns the cart."""
    session = MagicBasketSession(InMemoryCartStore())
    preferences = UserPreferences(
        target_location=payload.location_key,
        dietary_restrictions=frozenset(payload.dietary_restrictions),
    )
    try:
        catalog = [product.to_domain() for product in payload.catalog] if payload.catalog else None
        basket = await session.generate(catalog, farms_to_domain(payload.farms), preferences, payload.basket_size)
        grouping = session.grouping()
    except ZoneOverlapError as exc:
        logger.error("Rejected magic basket generation due to malformed zone data: %s", exc)
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return BasketResponse(
        product_ids=list(basket.product_ids),
        products=[ProductModel.from_domain(product) for product in basket.products],
        grouping=AggregationResponse.from_result(grouping),
    )
