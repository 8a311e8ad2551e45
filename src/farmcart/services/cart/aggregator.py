"""Partition cart items into delivery zone and farm groups."""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from ...models.domain import CartItem, Farm
from ..zoning.resolver import resolve_zone
from .models import AggregationResult, CartGroup, FarmGroup, UnserviceableItem, UnserviceableReason

logger = logging.getLogger(__name__)


def _display_key(name: str, ident: str) -> tuple[str, str, str]:
    return (name.casefold(), name, ident)


def _sort_groups(groups: dict[str, CartGroup]) -> list[CartGroup]:
    ordered: list[CartGroup] = []
    for group in sorted(groups.values(), key=lambda g: _display_key(g.zone_name, g.zone_id)):
        group.farms = {
            farm.farm_id: farm
            for farm in sorted(group.farms.values(), key=lambda f: _display_key(f.farm_name, f.farm_id))
        }
        ordered.append(group)
    return ordered


def aggregate_cart(
    items: Sequence[CartItem],
    farms: Mapping[str, Farm],
    location_key: str,
) -> AggregationResult:
    """Group ``items`` by the zone serving ``location_key`` and then by farm.

    Items whose farm is unknown or does not deliver to the location are
    returned in ``unserviceable`` with a reason; nothing is dropped. Only a
    ``ZoneOverlapError`` from malformed zone data escapes.
    """

    groups: dict[str, CartGroup] = {}
    unserviceable: list[UnserviceableItem] = []

    for item in items:
        farm = farms.get(item.farm_id)
        if farm is None:
            unserviceable.append(UnserviceableItem(item, UnserviceableReason.UNRESOLVED_FARM))
            continue

        zone = resolve_zone(farm, location_key)
        if zone is None:
            unserviceable.append(UnserviceableItem(item, UnserviceableReason.NO_SERVICEABLE_ZONE))
            continue

        group = groups.get(zone.id)
        if group is None:
            group = groups[zone.id] = CartGroup(zone_id=zone.id, zone_name=zone.name)
        elif zone.name < group.zone_name:
            # farms sharing a zone id may name it differently; keep the smallest
            group.zone_name = zone.name
        farm_group = group.farms.get(farm.id)
        if farm_group is None:
            farm_group = group.farms[farm.id] = FarmGroup(
                farm_id=farm.id,
                farm_name=farm.name,
                delivery_fee=zone.delivery_fee,
                minimum_order=zone.minimum_order,
                delivery_days=zone.delivery_days,
                estimated_delivery_time=zone.estimated_delivery_time,
            )
        farm_group.items.append(item)

    if unserviceable:
        logger.warning(
            "%d of %d cart item(s) cannot be delivered to '%s'",
            len(unserviceable),
            len(items),
            location_key,
        )
    logger.info("Aggregated %d cart item(s) into %d zone group(s)", len(items), len(groups))

    return AggregationResult(
        groups=_sort_groups(groups),
        unserviceable=unserviceable,
        location_key=location_key,
    )
