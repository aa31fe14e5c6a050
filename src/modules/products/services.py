"""Product service layer (Use Cases).

``IProductService`` is the contract the request handler depends on;
``ProductService`` implements it over an injected ``IProductRepository``
and hands back ``ProductOutputDTO`` projections, never ORM instances.

Uniqueness of ``code`` and ``name`` is *probed* here (``exists`` /
``exists_excluding_id``) but decided by the caller; the database partial
unique constraints reject whatever slips through a concurrent race.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

import structlog
from django.db import transaction

from modules.products.dtos import ProductOutputDTO
from modules.products.exceptions import InvalidLookupField, ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

# Probe field names as exposed to callers -> model field names.
LOOKUP_FIELDS: Dict[str, str] = {"Name": "name", "Code": "code"}


def _model_field(field_name: str) -> str:
    try:
        return LOOKUP_FIELDS[field_name]
    except KeyError:
        raise InvalidLookupField(
            f"Cannot probe products by '{field_name}'; "
            f"expected one of {sorted(LOOKUP_FIELDS)}."
        ) from None


class IProductService(ABC):
    """Boundary contract consumed by ``ProductRequestHandler``."""

    @abstractmethod
    def list_page(
        self, page_number: int, page_size: int
    ) -> Tuple[List[ProductOutputDTO], int]:
        """Return one page of products and the total product count."""

    @abstractmethod
    def list_all(self) -> List[ProductOutputDTO]:
        """Return every product."""

    @abstractmethod
    def get(self, id: int) -> Optional[ProductOutputDTO]:
        """Return a product or ``None`` when it does not exist."""

    @abstractmethod
    def exists(self, field_name: str, value: str) -> bool:
        """Whether any product has ``field_name == value``."""

    @abstractmethod
    def exists_excluding_id(self, id: int, field_name: str, value: str) -> bool:
        """Whether a product other than ``id`` has ``field_name == value``."""

    @abstractmethod
    def create(self, model: CreateProductDTO) -> ProductOutputDTO:
        """Persist a new product and return it."""

    @abstractmethod
    def update(self, model: UpdateProductDTO) -> None:
        """Overwrite an existing product."""

    @abstractmethod
    def delete(self, id: int) -> None:
        """Remove a product."""


class ProductService(IProductService):
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_page(
        self, page_number: int, page_size: int
    ) -> Tuple[List[ProductOutputDTO], int]:
        offset = max(page_number - 1, 0) * page_size
        products, total = self._repo.list_page(offset, page_size)
        return [ProductOutputDTO.from_entity(p) for p in products], total

    def list_all(self) -> List[ProductOutputDTO]:
        return [ProductOutputDTO.from_entity(p) for p in self._repo.list()]

    def get(self, id: int) -> Optional[ProductOutputDTO]:
        product = self._repo.get_by_id(id)
        if product is None:
            return None
        logger.info("product.retrieved", product_id=id)
        return ProductOutputDTO.from_entity(product)

    def exists(self, field_name: str, value: str) -> bool:
        return self._repo.exists(_model_field(field_name), value)

    def exists_excluding_id(self, id: int, field_name: str, value: str) -> bool:
        return self._repo.exists(_model_field(field_name), value, exclude_id=id)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, model: CreateProductDTO) -> ProductOutputDTO:
        product = Product(
            code=model.code,
            name=model.name,
            price=model.price,
            description=model.description,
            is_active=model.is_active,
        )
        product = self._repo.save(product)
        logger.info("product.created", product_id=product.id, code=product.code)
        return ProductOutputDTO.from_entity(product)

    @transaction.atomic
    def update(self, model: UpdateProductDTO) -> None:
        """Overwrite every editable field of an existing product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(model.id)
        if product is None:
            raise ProductNotFound(f"Product {model.id} not found.")

        for field in ("code", "name", "price", "description", "is_active"):
            setattr(product, field, getattr(model, field))

        self._repo.save(product)
        logger.info("product.updated", product_id=model.id)

    @transaction.atomic
    def delete(self, id: int) -> None:
        """Soft-delete a product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        if not self._repo.delete(id):
            raise ProductNotFound(f"Product {id} not found.")
        logger.info("product.deleted", product_id=id)
