"""Order total computation for a fully serviceable cart."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from ...errors import UnserviceableCartError
from ...models.domain import DeliveryOption
from ..cart.models import CartGroup, UnserviceableItem

CENT = Decimal("0.01")

logger = logging.getLogger(__name__)


def round_currency(amount: Decimal) -> Decimal:
    """Round half away from zero to cents (no banker's rounding)."""

    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(slots=True, frozen=True)
class Totals:
    subtotal: Decimal
    delivery_fee: Decimal
    tax: Decimal
    total: Decimal
    tax_rate: Decimal
    delivery_option_id: str
    item_count: int


def compute_totals(
    groups: Sequence[CartGroup],
    unserviceable: Sequence[UnserviceableItem],
    delivery_option: DeliveryOption,
    tax_rate: float | Decimal,
) -> Totals:
    """Combine grouped cart subtotals, one order-wide delivery fee and a flat tax rate.

    The delivery fee is the chosen option's price for the whole order; the
    per-zone fees carried on the groups are not added. Subtotal and tax are
    each rounded once from the unrounded item sum.
    """

    if unserviceable:
        raise UnserviceableCartError(unserviceable)

    rate = tax_rate if isinstance(tax_rate, Decimal) else Decimal(str(tax_rate))
    if rate < 0:
        raise ValueError("tax_rate must be >= 0")

    raw_subtotal = sum((group.subtotal for group in groups), Decimal("0"))
    subtotal = round_currency(raw_subtotal)
    delivery_fee = round_currency(delivery_option.price)
    tax = round_currency(raw_subtotal * rate)
    # sum of the displayed lines, so subtotal + delivery_fee + tax == total always holds
    total = round_currency(subtotal + delivery_fee + tax)

    item_count = sum(len(group.items) for group in groups)
    logger.info(
        "Computed totals for %d item(s): subtotal=%s delivery=%s tax=%s total=%s",
        item_count,
        subtotal,
        delivery_fee,
        tax,
        total,
    )
    return Totals(
        subtotal=subtotal,
        delivery_fee=delivery_fee,
        tax=tax,
        total=total,
        tax_rate=rate,
        delivery_option_id=delivery_option.id,
        item_count=item_count,
    )
