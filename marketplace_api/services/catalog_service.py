"""Read access to the product catalog plus the authenticated admin path."""

from __future__ import annotations

import logging
import math

from marketplace_api.db.repositories import ProductRepository
from marketplace_api.errors import InvalidInput, NotFound
from marketplace_api.schemas.product import (
    ProductCreate,
    ProductPage,
    ProductRead,
    ProductUpdate,
)

logger = logging.getLogger(__name__)


class CatalogService:
    """Paginated, searchable product listing and single-product lookups."""

    def __init__(
        self,
        products: ProductRepository,
        *,
        default_page_size: int = 6,
        max_page_size: int = 200,
    ) -> None:
        self._products = products
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    async def list_products(
        self,
        *,
        page: int = 1,
        page_size: int | None = None,
        search: str | None = None,
    ) -> ProductPage:
        """Return page ``page`` of the products whose title contains ``search``."""

        limit = page_size if page_size is not None else self._default_page_size
        if page < 1:
            raise InvalidInput("page must be at least 1")
        if limit < 1 or limit > self._max_page_size:
            raise InvalidInput(f"limit must be between 1 and {self._max_page_size}")

        items, total = await self._products.list_products(
            offset=(page - 1) * limit,
            limit=limit,
            search=search.strip() if search else None,
        )
        return ProductPage(
            products=[ProductRead.model_validate(item) for item in items],
            total=total,
            page=page,
            pages=math.ceil(total / limit),
        )

    async def get_product(self, product_id: str) -> ProductRead:
        product = await self._products.get(product_id)
        if product is None:
            raise NotFound("Product not found")
        return ProductRead.model_validate(product)

    async def create_product(self, payload: ProductCreate) -> ProductRead:
        product = await self._products.create(**payload.model_dump())
        logger.info("Created product %s", product.id)
        return ProductRead.model_validate(product)

    async def update_product(self, product_id: str, payload: ProductUpdate) -> ProductRead:
        product = await self._products.get(product_id)
        if product is None:
            raise NotFound("Product not found")

        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        product = await self._products.update(product, changes)
        return ProductRead.model_validate(product)

    async def delete_product(self, product_id: str) -> None:
        """Delete a product; users' favorites keep referencing its id."""

        product = await self._products.get(product_id)
        if product is None:
            raise NotFound("Product not found")

        await self._products.delete(product)
        logger.info("Deleted product %s", product_id)
