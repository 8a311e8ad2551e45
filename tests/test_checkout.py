from datetime import datetime, timezone
from decimal import Decimal

import pytest

from farmcart.errors import UnserviceableCartError
from farmcart.models.domain import CartItem, DeliveryOption, DeliveryZone, Farm
from farmcart.services.cart.aggregator import aggregate_cart
from farmcart.services.checkout.options import default_delivery_options, get_delivery_option
from farmcart.services.checkout.service import prepare_checkout
from farmcart.services.checkout.totals import compute_totals, round_currency


def _item(item_id: str, farm_id: str, price: str, quantity: int = 1) -> CartItem:
    return CartItem(
        id=item_id,
        product_id=f"P-{item_id}",
        farm_id=farm_id,
        farm_name=f"Farm {farm_id}",
        name=f"Product {item_id}",
        price=Decimal(price),
        quantity=quantity,
        unit="each",
    )


def _option(price: str, option_id: str = "standard") -> DeliveryOption:
    return DeliveryOption(
        id=option_id,
        type="standard",
        name="Standard Delivery",
        price=Decimal(price),
        estimated_delivery=datetime(2026, 1, 5, tzinfo=timezone.utc),
    )


FARMS = {
    "A": Farm(
        id="A",
        name="Apple Hill",
        delivery_zones=(DeliveryZone(id="SF", name="San Francisco", areas=frozenset({"94107"}), delivery_fee="7.00"),),
    ),
    "B": Farm(
        id="B",
        name="Bluff Ranch",
        delivery_zones=(DeliveryZone(id="LA", name="Los Angeles", areas=frozenset({"90001"})),),
    ),
}


def test_totals_scenario():
    cart = [_item("1", "A", "12.99", 2), _item("2", "A", "19.99")]
    result = aggregate_cart(cart, FARMS, "94107")

    totals = compute_totals(result.groups, result.unserviceable, _option("4.99"), 0.08)

    assert totals.subtotal == Decimal("45.97")
    assert totals.delivery_fee == Decimal("4.99")
    assert totals.tax == Decimal("3.68")
    assert totals.total == Decimal("54.64")
    assert totals.item_count == 2


def test_flat_option_fee_ignores_zone_fees():
    result = aggregate_cart([_item("1", "A", "10.00")], FARMS, "94107")

    totals = compute_totals(result.groups, result.unserviceable, _option("0.00", "pickup"), Decimal("0"))

    assert totals.delivery_fee == Decimal("0.00")
    assert totals.total == Decimal("10.00")


def test_unserviceable_items_block_checkout():
    cart = [_item("1", "A", "5.00"), _item("2", "B", "6.00")]
    result = aggregate_cart(cart, FARMS, "94107")

    with pytest.raises(UnserviceableCartError) as excinfo:
        compute_totals(result.groups, result.unserviceable, _option("4.99"), 0.08)

    assert [entry.cart_item.id for entry in excinfo.value.items] == ["2"]
    assert "Product 2 (Farm B)" in str(excinfo.value)


def test_tax_rounds_half_up():
    # 0.0625 * 0.08 = 0.005 -> rounds up to 0.01 rather than to even
    assert round_currency(Decimal("0.005")) == Decimal("0.01")
    assert round_currency(Decimal("0.015")) == Decimal("0.02")
    result = aggregate_cart([_item("1", "A", "0.0625")], FARMS, "94107")

    totals = compute_totals(result.groups, result.unserviceable, _option("0"), 0.08)

    assert totals.tax == Decimal("0.01")
    assert totals.total == totals.subtotal + totals.delivery_fee + totals.tax


def test_negative_tax_rate_is_rejected():
    with pytest.raises(ValueError):
        compute_totals([], [], _option("4.99"), -0.01)


def test_empty_cart_totals_to_delivery_fee():
    totals = compute_totals([], [], _option("4.99"), 0.08)

    assert totals.subtotal == Decimal("0.00")
    assert totals.total == Decimal("4.99")


def test_default_delivery_options_catalog():
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    options = {option.id: option for option in default_delivery_options(now)}

    assert options["standard"].price == Decimal("4.99")
    assert options["express"].price == Decimal("9.99")
    assert options["pickup"].price == Decimal("0.00")
    assert options["standard"].estimated_delivery == datetime(2026, 1, 5, tzinfo=timezone.utc)
    assert options["pickup"].pickup_location is not None
    assert len(options["pickup"].available_time_slots) == 3


def test_unknown_delivery_option_is_rejected():
    with pytest.raises(ValueError):
        get_delivery_option("drone")


def test_prepare_checkout_aggregates_and_totals(monkeypatch):
    from farmcart.services.checkout import service as checkout_service

    monkeypatch.setattr(checkout_service.settings, "default_tax_rate", 0.1)
    cart = [_item("1", "A", "10.00", 3)]

    summary = prepare_checkout(cart, FARMS, "94107", "express")

    assert summary.delivery_option.id == "express"
    assert summary.aggregation.groups[0].zone_id == "SF"
    assert summary.totals.tax == Decimal("3.00")
    assert summary.totals.total == Decimal("42.99")
