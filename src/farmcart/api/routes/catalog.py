"""API routes exposing the configured catalog snapshot."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from ...data.catalog_repository import load_catalog
from ...schemas.catalog import CatalogResponse, FarmModel, ProductModel

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("", response_model=CatalogResponse, status_code=status.HTTP_200_OK)
def get_catalog() -> CatalogResponse:
    try:
        catalog = load_catalog()
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return CatalogResponse(
        farms=[FarmModel.from_domain(farm) for farm in catalog.farms],
        products=[ProductModel.from_domain(product) for product in catalog.products],
    )
