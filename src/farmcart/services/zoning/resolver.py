"""Delivery zone resolution for a farm and a target location key."""

from __future__ import annotations

import logging

from ...errors import ZoneOverlapError
from ...models.domain import DeliveryZone, Farm

logger = logging.getLogger(__name__)


def resolve_zone(farm: Farm, location_key: str) -> DeliveryZone | None:
    """Return the farm's zone covering ``location_key``, or ``None`` when not serviceable.

    Zones are scanned in farm order. A location key claimed by more than one
    zone of the same farm is a data error and raises ``ZoneOverlapError``
    instead of silently picking the first match.
    """

    matches = [zone for zone in farm.delivery_zones if zone.covers(location_key)]
    if len(matches) > 1:
        zone_ids = [zone.id for zone in matches]
        logger.error(
            "Overlapping delivery zones %s for farm '%s' at location '%s'",
            zone_ids,
            farm.id,
            location_key,
        )
        raise ZoneOverlapError(farm.id, location_key, zone_ids)
    return matches[0] if matches else None


def is_serviceable(farm: Farm, location_key: str) -> bool:
    return resolve_zone(farm, location_key) is not None


def find_zone_overlaps(farm: Farm) -> dict[str, tuple[str, ...]]:
    """Map every location key claimed by several zones of ``farm`` to those zone ids."""

    claims: dict[str, list[str]] = {}
    for zone in farm.delivery_zones:
        for area in zone.areas:
            claims.setdefault(area, []).append(zone.id)
    return {area: tuple(zone_ids) for area, zone_ids in sorted(claims.items()) if len(zone_ids) > 1}


def validate_farm_zones(farm: Farm) -> Farm:
    """Raise ``ZoneOverlapError`` for the first overlapping area of ``farm``."""

    overlaps = find_zone_overlaps(farm)
    if overlaps:
        area, zone_ids = next(iter(overlaps.items()))
        raise ZoneOverlapError(farm.id, area, zone_ids)
    return farm
