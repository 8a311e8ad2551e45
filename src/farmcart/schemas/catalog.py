"""Pydantic models for catalog payloads."""

from __future__ import annotations

from decimal import Decimal
from typing import Literal, Optional, Sequence

from pydantic import BaseModel, Field

from ..models.domain import DeliveryZone, Farm, Product

Season = Literal["spring", "summer", "fall", "winter", "year-round"]


class DeliveryZoneModel(BaseModel):
    id: str
    name: str
    areas: list[str] = Field(default_factory=list, description="Location keys (postal codes) served.")
    delivery_days: list[str] = Field(default_factory=list)
    delivery_fee: Decimal = Field(default=Decimal("0"), ge=0)
    minimum_order: Decimal = Field(default=Decimal("0"), ge=0)
    estimated_delivery_time: str = ""

    def to_domain(self) -> DeliveryZone:
        return DeliveryZone(
            id=self.id,
            name=self.name,
            areas=frozenset(self.areas),
            delivery_days=tuple(self.delivery_days),
            delivery_fee=self.delivery_fee,
            minimum_order=self.minimum_order,
            estimated_delivery_time=self.estimated_delivery_time,
        )

    @classmethod
    def from_domain(cls, zone: DeliveryZone) -> "DeliveryZoneModel":
        return cls(
            id=zone.id,
            name=zone.name,
            areas=sorted(zone.areas),
            delivery_days=list(zone.delivery_days),
            delivery_fee=zone.delivery_fee,
            minimum_order=zone.minimum_order,
            estimated_delivery_time=zone.estimated_delivery_time,
        )


class FarmModel(BaseModel):
    id: str
    name: str
    delivery_zones: list[DeliveryZoneModel] = Field(default_factory=list)

    def to_domain(self) -> Farm:
        return Farm(id=self.id, name=self.name, delivery_zones=tuple(zone.to_domain() for zone in self.delivery_zones))

    @classmethod
    def from_domain(cls, farm: Farm) -> "FarmModel":
        return cls(
            id=farm.id,
            name=farm.name,
            delivery_zones=[DeliveryZoneModel.from_domain(zone) for zone in farm.delivery_zones],
        )


class ProductModel(BaseModel):
    id: str
    farm_id: str
    name: str = ""
    price: Decimal = Field(..., ge=0)
    unit: str = "each"
    category_id: Optional[str] = None
    subcategory_id: Optional[str] = None
    variety_id: Optional[str] = None
    organic: bool = False
    in_season: bool = False
    pre_harvest: bool = False
    freshness: Optional[int] = Field(default=None, ge=0, le=100)
    seasons: list[Season] = Field(default_factory=list)
    in_stock: bool = True

    def to_domain(self) -> Product:
        return Product(
            id=self.id,
            farm_id=self.farm_id,
            name=self.name,
            price=self.price,
            unit=self.unit,
            category_id=self.category_id,
            subcategory_id=self.subcategory_id,
            variety_id=self.variety_id,
            organic=self.organic,
            in_season=self.in_season,
            pre_harvest=self.pre_harvest,
            freshness=self.freshness,
            seasons=frozenset(self.seasons),
            in_stock=self.in_stock,
        )

    @classmethod
    def from_domain(cls, product: Product) -> "ProductModel":
        return cls(
            id=product.id,
            farm_id=product.farm_id,
            name=product.name,
            price=product.price,
            unit=product.unit,
            category_id=product.category_id,
            subcategory_id=product.subcategory_id,
            variety_id=product.variety_id,
            organic=product.organic,
            in_season=product.in_season,
            pre_harvest=product.pre_harvest,
            freshness=product.freshness,
            seasons=sorted(product.seasons),
            in_stock=product.in_stock,
        )


class CatalogResponse(BaseModel):
    farms: list[FarmModel]
    products: list[ProductModel]


def farms_to_domain(farms: Sequence[FarmModel]) -> dict[str, Farm]:
    return {farm.id: farm.to_domain() for farm in farms}
