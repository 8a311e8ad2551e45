"""Catalog snapshot loading."""

from .catalog_repository import Catalog, farms_by_id, load_catalog

__all__ = ["Catalog", "farms_by_id", "load_catalog"]
