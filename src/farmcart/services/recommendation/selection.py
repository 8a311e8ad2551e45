"""Candidate filtering and deterministic ranking for the magic basket."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence

from ...models.domain import CartItem, Farm, Product, UserPreferences
from ..cart.store import new_cart_item_id
from ..zoning.resolver import resolve_zone

DEFAULT_BASKET_SIZE = 10
DEFAULT_FRESHNESS_THRESHOLD = 80

logger = logging.getLogger(__name__)


def is_dietary_match(product: Product, preferences: UserPreferences) -> bool:
    return not preferences.requires("organic") or product.organic


def is_fresh(product: Product, threshold: int = DEFAULT_FRESHNESS_THRESHOLD) -> bool:
    return (product.freshness is not None and product.freshness > threshold) or product.in_season


def is_deliverable(product: Product, farms: Mapping[str, Farm], location_key: str) -> bool:
    farm = farms.get(product.farm_id)
    if farm is None:
        return False
    return resolve_zone(farm, location_key) is not None


def filter_candidates(
    catalog: Iterable[Product],
    farms: Mapping[str, Farm],
    preferences: UserPreferences,
    *,
    freshness_threshold: int = DEFAULT_FRESHNESS_THRESHOLD,
) -> list[Product]:
    """Keep products that are in stock, match diet, are fresh and can be delivered."""

    return [
        product
        for product in catalog
        if product.in_stock
        and is_dietary_match(product, preferences)
        and is_fresh(product, freshness_threshold)
        and is_deliverable(product, farms, preferences.target_location)
    ]


def ranking_key(product: Product) -> tuple:
    """In season first, then fresher, then cheaper, then by id."""

    freshness = product.freshness if product.freshness is not None else -1
    return (not product.in_season, -freshness, product.price, product.id)


def select_basket(
    catalog: Optional[Sequence[Product]],
    farms: Mapping[str, Farm],
    preferences: UserPreferences,
    basket_size: int = DEFAULT_BASKET_SIZE,
    *,
    freshness_threshold: int = DEFAULT_FRESHNESS_THRESHOLD,
) -> list[Product]:
    """Pick up to ``basket_size`` products, independent of catalog order."""

    if basket_size < 0:
        raise ValueError("basket_size must be >= 0")
    if not catalog:
        return []

    candidates = filter_candidates(
        catalog,
        farms,
        preferences,
        freshness_threshold=freshness_threshold,
    )
    selected = sorted(candidates, key=ranking_key)[:basket_size]
    logger.info(
        "Selected %d of %d candidate(s) from %d catalog product(s) for '%s'",
        len(selected),
        len(candidates),
        len(catalog),
        preferences.target_location,
    )
    return selected


def products_to_cart_items(products: Iterable[Product], farms: Mapping[str, Farm]) -> list[CartItem]:
    items: list[CartItem] = []
    for product in products:
        farm = farms.get(product.farm_id)
        items.append(
            CartItem(
                id=new_cart_item_id(product.id, product.farm_id),
                product_id=product.id,
                farm_id=product.farm_id,
                farm_name=farm.name if farm else product.farm_id,
                name=product.name,
                price=product.price,
                quantity=1,
                unit=product.unit,
            )
        )
    return items
