"""Data access helpers for loading the farm and product catalog snapshot."""

from __future__ import annotations

import functools
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

from ..config import settings
from ..models.domain import DeliveryZone, Farm, Product
from ..services.zoning.resolver import validate_farm_zones

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Catalog:
    farms: tuple[Farm, ...]
    products: tuple[Product, ...]

    def farms_by_id(self) -> dict[str, Farm]:
        return farms_by_id(self.farms)


def farms_by_id(farms: Iterable[Farm]) -> dict[str, Farm]:
    return {farm.id: farm for farm in farms}


def _require(row: dict, key: str, kind: str) -> Any:
    value = row.get(key)
    if value is None or value == "":
        raise ValueError(f"{kind} record is missing '{key}': {row}")
    return value


def _parse_zone(row: dict) -> DeliveryZone:
    return DeliveryZone(
        id=str(_require(row, "id", "Delivery zone")),
        name=str(_require(row, "name", "Delivery zone")),
        areas=frozenset(str(area).strip() for area in row.get("areas") or []),
        delivery_days=tuple(row.get("deliveryDays") or ()),
        delivery_fee=row.get("deliveryFee", 0),
        minimum_order=row.get("minimumOrder", 0),
        estimated_delivery_time=str(row.get("estimatedDeliveryTime") or ""),
    )


def _parse_farm(row: dict) -> Farm:
    farm = Farm(
        id=str(_require(row, "id", "Farm")),
        name=str(_require(row, "name", "Farm")),
        delivery_zones=tuple(_parse_zone(zone) for zone in row.get("deliveryZones") or []),
    )
    return validate_farm_zones(farm)


def _parse_product(row: dict) -> Product:
    pre_harvest = bool(row.get("preHarvest", False))
    freshness = row.get("freshness")
    return Product(
        id=str(_require(row, "id", "Product")),
        farm_id=str(_require(row, "farmId", "Product")),
        name=str(row.get("name") or ""),
        price=_require(row, "price", "Product"),
        unit=str(row.get("unit") or "each"),
        category_id=row.get("category"),
        subcategory_id=row.get("subcategory"),
        variety_id=row.get("variety"),
        organic=bool(row.get("organic", False)),
        in_season=bool(row.get("inSeason", False)),
        pre_harvest=pre_harvest,
        freshness=None if pre_harvest or freshness is None else int(freshness),
        seasons=frozenset(row.get("seasons") or ()),
        in_stock=bool(row.get("inStock", True)),
    )


@functools.lru_cache(maxsize=1)
def load_catalog(source: Optional[Path] = None) -> Catalog:
    """Load farms and products from the configured JSON snapshot."""

    json_path = source or settings.catalog_file
    if not json_path.exists():
        raise FileNotFoundError(f"Catalog file not found: {json_path}")

    with json_path.open(mode="r", encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Catalog file '{json_path}' is not valid JSON.") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"Catalog file '{json_path}' must contain a JSON object.")

    farms = tuple(_parse_farm(row) for row in payload.get("farms") or [])
    products = tuple(_parse_product(row) for row in payload.get("products") or [])

    known_farms = {farm.id for farm in farms}
    orphaned = [product.id for product in products if product.farm_id not in known_farms]
    if orphaned:
        logger.warning("Catalog has %d product(s) referencing unknown farms: %s", len(orphaned), orphaned)

    logger.info("Loaded catalog with %d farm(s) and %d product(s) from %s", len(farms), len(products), json_path)
    return Catalog(farms=farms, products=products)
