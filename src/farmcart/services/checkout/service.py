"""High-level orchestration for checkout requests."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping, Sequence

from ...config import settings
from ...models.domain import CartItem, DeliveryOption, Farm
from ..cart.aggregator import aggregate_cart
from ..cart.models import AggregationResult
from .options import get_delivery_option
from .totals import Totals, compute_totals


@dataclass(slots=True)
class CheckoutSummary:
    aggregation: AggregationResult
    delivery_option: DeliveryOption
    totals: Totals


def prepare_checkout(
    items: Sequence[CartItem],
    farms: Mapping[str, Farm],
    location_key: str,
    delivery_option_id: str,
    tax_rate: float | Decimal | None = None,
    *,
    delivery_options: Sequence[DeliveryOption] | None = None,
) -> CheckoutSummary:
    option = get_delivery_option(delivery_option_id, delivery_options)
    aggregation = aggregate_cart(items, farms, location_key)
    totals = compute_totals(
        aggregation.groups,
        aggregation.unserviceable,
        option,
        settings.default_tax_rate if tax_rate is None else tax_rate,
    )
    return CheckoutSummary(aggregation=aggregation, delivery_option=option, totals=totals)
