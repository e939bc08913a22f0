"""FastAPI router exposing the catalog, product admin and favorites toggles."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from marketplace_api.schemas.favorites import FavoritesResponse, MessageResponse
from marketplace_api.schemas.product import (
    ProductCreate,
    ProductPage,
    ProductRead,
    ProductUpdate,
)
from marketplace_api.services.catalog_service import CatalogService
from marketplace_api.services.dependencies import (
    get_catalog_service,
    get_current_user_id,
    get_favorites_service,
)
from marketplace_api.services.favorites_service import FavoritesService

router = APIRouter()


@router.get("", response_model=ProductPage)
@router.get("/", response_model=ProductPage, include_in_schema=False)
async def list_products(
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int | None = Query(
        None,
        ge=1,
        description="Products per page; defaults to the configured page size.",
    ),
    search: str = Query("", description="Case-insensitive substring of the title."),
    service: CatalogService = Depends(get_catalog_service),
) -> ProductPage:
    """List products with offset pagination and optional title search."""

    return await service.list_products(page=page, page_size=limit, search=search)


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    payload: ProductCreate,
    _user_id: str = Depends(get_current_user_id),
    service: CatalogService = Depends(get_catalog_service),
) -> ProductRead:
    return await service.create_product(payload)


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(
    product_id: str,
    service: CatalogService = Depends(get_catalog_service),
) -> ProductRead:
    return await service.get_product(product_id)


@router.put("/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    _user_id: str = Depends(get_current_user_id),
    service: CatalogService = Depends(get_catalog_service),
) -> ProductRead:
    """Apply a partial update; omitted fields are left untouched."""

    return await service.update_product(product_id, payload)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    _user_id: str = Depends(get_current_user_id),
    service: CatalogService = Depends(get_catalog_service),
) -> MessageResponse:
    await service.delete_product(product_id)
    return MessageResponse(message="Product removed")


@router.post("/{product_id}/favorite", response_model=FavoritesResponse)
async def add_favorite(
    product_id: str,
    user_id: str = Depends(get_current_user_id),
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoritesResponse:
    """Favorite a product for the caller and return the authoritative list."""

    favorites = await service.add_favorite(user_id=user_id, product_id=product_id)
    return FavoritesResponse(favorites=favorites)


@router.delete("/{product_id}/favorite", response_model=FavoritesResponse)
async def remove_favorite(
    product_id: str,
    user_id: str = Depends(get_current_user_id),
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoritesResponse:
    """Unfavorite a product; unknown ids are a no-op."""

    favorites = await service.remove_favorite(user_id=user_id, product_id=product_id)
    return FavoritesResponse(favorites=favorites)
