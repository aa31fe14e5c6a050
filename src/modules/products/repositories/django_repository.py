"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Every query is restricted to ``Product.objects.alive()``: soft-deleted
rows are invisible to the catalogue.  Methods return ``None``/``False``
for missing rows instead of raising; the Service Layer decides what a
missing entity means.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import structlog

from django.db import transaction

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a live product by primary key.

        Returns ``None`` for non-existent, deleted or malformed IDs.
        """
        try:
            return Product.objects.alive().filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def list(self) -> List[Product]:
        return list(Product.objects.alive().order_by("id"))

    def list_page(self, offset: int, limit: int) -> Tuple[List[Product], int]:
        queryset = Product.objects.alive().order_by("id")
        total = queryset.count()
        items = list(queryset[offset : offset + limit])
        return items, total

    def exists(self, field: str, value: str, exclude_id: Optional[int] = None) -> bool:
        queryset = Product.objects.alive().filter(**{field: value})
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.exists()

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.full_clean(validate_unique=False, validate_constraints=False)
        entity.save()
        return entity

    @transaction.atomic
    def delete(self, id: int) -> bool:
        """Soft-delete a product by ID.

        Returns ``True`` if the product was found and soft-deleted,
        ``False`` if no live product exists with the given ID.
        """
        product = self.get_by_id(id)
        if not product:
            return False
        product.delete()
        logger.info("product.soft_deleted", product_id=id)
        return True
