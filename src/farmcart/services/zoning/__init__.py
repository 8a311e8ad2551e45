"""Delivery zone resolution."""

from .resolver import find_zone_overlaps, is_serviceable, resolve_zone, validate_farm_zones

__all__ = ["resolve_zone", "is_serviceable", "find_zone_overlaps", "validate_farm_zones"]
