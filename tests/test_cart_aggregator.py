import itertools
from decimal import Decimal

import pytest

from farmcart.errors import ZoneOverlapError
from farmcart.models.domain import CartItem, DeliveryZone, Farm
from farmcart.services.cart.aggregator import aggregate_cart
from farmcart.services.cart.models import UnserviceableReason


def _item(item_id: str, farm_id: str, price: str, quantity: int = 1, farm_name: str = "") -> CartItem:
    return CartItem(
        id=item_id,
        product_id=f"P-{item_id}",
        farm_id=farm_id,
        farm_name=farm_name or f"Farm {farm_id}",
        name=f"Product {item_id}",
        price=Decimal(price),
        quantity=quantity,
        unit="lb",
    )


def _farm(farm_id: str, name: str, *zones: DeliveryZone) -> Farm:
    return Farm(id=farm_id, name=name, delivery_zones=zones)


@pytest.fixture
def farms() -> dict[str, Farm]:
    return {
        "A": _farm(
            "A",
            "Apple Hill",
            DeliveryZone(
                id="SF",
                name="San Francisco",
                areas=frozenset({"94107"}),
                delivery_fee=Decimal("3.00"),
                minimum_order=Decimal("20.00"),
                delivery_days=("Tue", "Fri"),
            ),
        ),
        "B": _farm("B", "Bluff Ranch", DeliveryZone(id="LA", name="Los Angeles", areas=frozenset({"90001"}))),
        "C": _farm("C", "Cedar Grove", DeliveryZone(id="MISSION", name="Mission", areas=frozenset({"94107"}))),
        "D": _farm("D", "Dune Farm", DeliveryZone(id="SF", name="San Francisco", areas=frozenset({"94107"}))),
    }


def test_scenario_groups_serviceable_farm_and_flags_the_rest(farms):
    items = [_item("1", "A", "4.50", 2), _item("2", "A", "3.25"), _item("3", "B", "6.00")]

    result = aggregate_cart(items, farms, "94107")

    assert [group.zone_id for group in result.groups] == ["SF"]
    group = result.groups[0]
    assert list(group.farms) == ["A"]
    assert [item.id for item in group.farms["A"].items] == ["1", "2"]
    assert group.farms["A"].subtotal == Decimal("12.25")
    assert group.subtotal == Decimal("12.25")

    assert len(result.unserviceable) == 1
    assert result.unserviceable[0].cart_item.id == "3"
    assert result.unserviceable[0].reason is UnserviceableReason.NO_SERVICEABLE_ZONE
    assert not result.is_fully_serviceable


def test_unknown_farm_is_reported_not_dropped(farms):
    items = [_item("1", "A", "1.00"), _item("2", "ZZZ", "2.00")]

    result = aggregate_cart(items, farms, "94107")

    assert [entry.cart_item.id for entry in result.unserviceable] == ["2"]
    assert result.unserviceable[0].reason is UnserviceableReason.UNRESOLVED_FARM
    assert result.item_count == 2


def test_every_item_lands_in_exactly_one_place(farms):
    items = [
        _item("1", "A", "1.10"),
        _item("2", "B", "2.20"),
        _item("3", "C", "3.30", 3),
        _item("4", "D", "4.40"),
        _item("5", "X", "5.50"),
        _item("6", "A", "6.60", 2),
    ]

    for location in ("94107", "90001", "00000"):
        result = aggregate_cart(items, farms, location)
        grouped_ids = [item.id for item in result.deliverable_items]
        unserviceable_ids = [entry.cart_item.id for entry in result.unserviceable]

        assert len(grouped_ids) + len(unserviceable_ids) == len(items)
        assert sorted(grouped_ids + unserviceable_ids) == sorted(item.id for item in items)


def test_subtotals_are_consistent(farms):
    items = [
        _item("1", "A", "1.10"),
        _item("2", "C", "3.30", 3),
        _item("3", "D", "4.40", 2),
        _item("4", "A", "0.99", 4),
    ]

    result = aggregate_cart(items, farms, "94107")

    for group in result.groups:
        for farm in group.farms.values():
            assert farm.subtotal == sum((item.price * item.quantity for item in farm.items), Decimal("0"))
        assert group.subtotal == sum((farm.subtotal for farm in group.farms.values()), Decimal("0"))
    assert result.deliverable_subtotal == sum((group.subtotal for group in result.groups), Decimal("0"))


def test_groups_and_farms_are_sorted_by_name(farms):
    items = [_item("1", "D", "1.00"), _item("2", "C", "1.00"), _item("3", "A", "1.00")]

    result = aggregate_cart(items, farms, "94107")

    assert [group.zone_name for group in result.groups] == ["Mission", "San Francisco"]
    # farms A and D share zone id "SF" and therefore one group
    assert list(result.groups[1].farms) == ["A", "D"]
    zone_ids = [group.zone_id for group in result.groups]
    assert len(zone_ids) == len(set(zone_ids))


def test_subtotal_does_not_depend_on_cart_order(farms):
    items = [_item("1", "A", "1.10"), _item("2", "C", "3.30", 3), _item("3", "D", "4.40", 2)]
    expected = aggregate_cart(items, farms, "94107").deliverable_subtotal

    for permutation in itertools.permutations(items):
        result = aggregate_cart(list(permutation), farms, "94107")
        assert result.deliverable_subtotal == expected
        assert [group.zone_id for group in result.groups] == ["MISSION", "SF"]


def test_farm_group_carries_zone_terms(farms):
    result = aggregate_cart([_item("1", "A", "5.00", 2)], farms, "94107")

    farm_group = result.groups[0].farms["A"]
    assert farm_group.delivery_fee == Decimal("3.00")
    assert farm_group.delivery_days == ("Tue", "Fri")
    assert not farm_group.meets_minimum
    assert farm_group.minimum_order_shortfall == Decimal("10.00")


def test_empty_cart_aggregates_to_nothing(farms):
    result = aggregate_cart([], farms, "94107")

    assert result.groups == []
    assert result.unserviceable == []
    assert result.deliverable_subtotal == Decimal("0")


def test_overlapping_zone_data_fails_the_whole_call(farms):
    broken = dict(farms)
    broken["A"] = _farm(
        "A",
        "Apple Hill",
        DeliveryZone(id="SF", name="San Francisco", areas=frozenset({"94107"})),
        DeliveryZone(id="SOMA", name="SoMa", areas=frozenset({"94107"})),
    )

    with pytest.raises(ZoneOverlapError):
        aggregate_cart([_item("1", "C", "1.00"), _item("2", "A", "1.00")], broken, "94107")


def test_shared_zone_name_does_not_depend_on_cart_order():
    farms = {
        "A": _farm("A", "Apple Hill", DeliveryZone(id="Z1", name="Zeta", areas=frozenset({"94107"}))),
        "B": _farm("B", "Bluff Ranch", DeliveryZone(id="Z1", name="Alpha", areas=frozenset({"94107"}))),
        "C": _farm("C", "Cedar Grove", DeliveryZone(id="Z2", name="Middle", areas=frozenset({"94107"}))),
    }
    items = [_item("1", "A", "1.00"), _item("2", "B", "1.00"), _item("3", "C", "1.00")]

    for permutation in itertools.permutations(items):
        result = aggregate_cart(list(permutation), farms, "94107")
        assert [(group.zone_id, group.zone_name) for group in result.groups] == [("Z1", "Alpha"), ("Z2", "Middle")]


def test_sorting_ignores_name_case():
    farms = {
        "A": _farm("A", "apple hill", DeliveryZone(id="Z1", name="bayview", areas=frozenset({"94107"}))),
        "B": _farm("B", "Cedar Grove", DeliveryZone(id="Z2", name="Castro", areas=frozenset({"94107"}))),
        "C": _farm("C", "Bluff Ranch", DeliveryZone(id="Z1", name="bayview", areas=frozenset({"94107"}))),
    }
    items = [_item("1", "B", "1.00"), _item("2", "C", "1.00"), _item("3", "A", "1.00")]

    result = aggregate_cart(items, farms, "94107")

    assert [group.zone_name for group in result.groups] == ["bayview", "Castro"]
    assert list(result.groups[0].farms) == ["A", "C"]
