"""Product store: catalog rows with offset pagination and title search."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.sql.elements import ColumnElement

from marketplace_api.db.models import Product
from marketplace_api.db.repositories.base import BaseRepository, escape_like

_UPDATABLE_FIELDS = ("title", "price", "description", "image")


def _title_filter(search: str | None) -> ColumnElement[bool] | None:
    """Return a case-insensitive, unanchored substring filter on ``title``."""

    if not search:
        return None
    return Product.title.ilike(f"%{escape_like(search)}%", escape="\\")


class ProductRepository(BaseRepository):
    """Encapsulates SQLAlchemy operations on the ``products`` table."""

    async def list_products(
        self,
        *,
        offset: int,
        limit: int,
        search: str | None = None,
    ) -> tuple[list[Product], int]:
        """Return one page of products and the total number of matches.

        Rows are ordered by creation time and then id so that consecutive pages
        never overlap.
        """

        condition = _title_filter(search)

        query = select(Product).order_by(Product.created_at, Product.id)
        count_query = select(func.count()).select_from(Product)
        if condition is not None:
            query = query.where(condition)
            count_query = count_query.where(condition)

        result = await self._session.execute(query.offset(offset).limit(limit))
        items = list(result.scalars().all())
        total = (await self._session.execute(count_query)).scalar_one()
        return items, int(total)

    async def get(self, product_id: str) -> Product | None:
        return await self._session.get(Product, product_id)

    async def create(
        self,
        *,
        title: str,
        price: float,
        description: str,
        image: str,
    ) -> Product:
        product = Product(
            title=title,
            price=price,
            description=description,
            image=image,
        )
        self._session.add(product)
        await self._session.flush()
        return product

    async def update(self, product: Product, changes: Mapping[str, Any]) -> Product:
        """Apply the supplied field changes, ignoring unknown keys."""

        for field in _UPDATABLE_FIELDS:
            if field in changes:
                setattr(product, field, changes[field])
        await self._session.flush()
        await self._session.refresh(product)
        return product

    async def delete(self, product: Product) -> None:
        await self._session.delete(product)
        await self._session.flush()
