"""Request handling for the product catalogue.

``ProductRequestHandler`` sits between the HTTP views and the product
service.  It owns two policies:

* **Read-through detail cache**: single-product reads look up
  ``Product_{id}`` first, fall back to the service on a miss and cache a
  found product for ``cache_ttl`` seconds.  Entries are never refreshed on
  read; updates and deletes remove them so the next read refetches.
* **Uniqueness pre-check**: create and update probe the service for an
  existing ``Name`` and then ``Code`` before writing; the first hit wins.

The pre-check is not atomic with the write: two concurrent requests can
both pass it.  The database unique constraints are what actually keep
names and codes unique; a request that loses that race gets an ordinary
write error back.

Every operation returns a ``HandlerResult``; service exceptions are
logged and converted, never propagated.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Type

import structlog
from django.conf import settings
from pydantic import ValidationError

from modules.core.cache import DjangoCache, ICache
from modules.products.dtos import (
    CreateProductDTO,
    UpdateProductDTO,
    validation_errors,
)
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.results import HandlerResult, PagedList
from modules.products.services import IProductService, ProductService

logger = structlog.get_logger(__name__)

DEFAULT_PAGE_SIZE = 4
DEFAULT_CACHE_TTL = 10 * 60

EXISTS_KEY = "Exists"
ERROR_KEY = "Error"
BODY_ERROR_KEY = "__all__"

BODY_NOT_OBJECT = "Expected an object with the product fields."

CREATE_ERROR = "An error occurred while adding the product- "
UPDATE_ERROR = "An error occurred while updating the product- "
DELETE_ERROR = "An error occurred while deleting the product."


def cache_key(id: int) -> str:
    return f"Product_{id}"


class ProductRequestHandler:
    """Mediates product requests between the views, the service and the cache."""

    def __init__(
        self,
        service: IProductService,
        cache: ICache,
        page_size: int = DEFAULT_PAGE_SIZE,
        cache_ttl: int = DEFAULT_CACHE_TTL,
    ) -> None:
        self._service = service
        self._cache = cache
        self._page_size = page_size
        self._cache_ttl = cache_ttl

    @classmethod
    def create_default(cls) -> ProductRequestHandler:
        """Wire the ORM-backed service and the configured Django cache."""
        return cls(
            service=ProductService(repository=ProductDjangoRepository()),
            cache=DjangoCache(),
            page_size=getattr(settings, "PRODUCT_PAGE_SIZE", DEFAULT_PAGE_SIZE),
            cache_ttl=getattr(settings, "PRODUCT_CACHE_TTL", DEFAULT_CACHE_TTL),
        )

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def list(self, page: Optional[int] = None) -> HandlerResult:
        page_number = page if page is not None else 1
        try:
            items, total = self._service.list_page(page_number, self._page_size)
        except Exception as exc:
            logger.exception("product.list_failed", page=page_number)
            return HandlerResult.server_error(str(exc))

        return HandlerResult.ok(
            PagedList(
                items=items,
                page_number=page_number,
                page_size=self._page_size,
                total_count=total,
            )
        )

    def list_all(self) -> HandlerResult:
        try:
            items = self._service.list_all()
        except Exception as exc:
            logger.exception("product.list_all_failed")
            return HandlerResult.server_error(str(exc))
        return HandlerResult.ok(items)

    # ------------------------------------------------------------------
    # Single product (read-through cache)
    # ------------------------------------------------------------------

    def get_detail(self, id: int) -> HandlerResult:
        return self._read_through(id)

    def show_edit_form(self, id: int) -> HandlerResult:
        return self._read_through(id)

    def _read_through(self, id: int) -> HandlerResult:
        key = cache_key(id)
        log = logger.bind(product_id=id, cache_key=key)
        try:
            hit, cached = self._cache.try_get(key)
            if hit:
                log.debug("product.cache_hit")
                return HandlerResult.ok(cached)

            product = self._service.get(id)
            if product is not None:
                self._cache.set(key, product, self._cache_ttl)
                log.debug("product.cache_filled", ttl=self._cache_ttl)
            return HandlerResult.ok(product)
        except Exception as exc:
            log.exception("product.retrieve_failed")
            return HandlerResult.server_error(str(exc))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, data: Mapping[str, Any]) -> HandlerResult:
        model = self._validate(CreateProductDTO, data)
        if isinstance(model, HandlerResult):
            return model

        try:
            conflict = self._check_unique(
                model,
                name_taken=lambda: self._service.exists("Name", model.name),
                code_taken=lambda: self._service.exists("Code", model.code),
            )
            if conflict is not None:
                return conflict

            created = self._service.create(model)
        except Exception as exc:
            logger.exception("product.create_failed", code=model.code)
            return HandlerResult.error(
                CREATE_ERROR + str(exc), key=ERROR_KEY, value=model
            )

        return HandlerResult.ok(created)

    def update(self, data: Mapping[str, Any]) -> HandlerResult:
        model = self._validate(UpdateProductDTO, data)
        if isinstance(model, HandlerResult):
            return model

        log = logger.bind(product_id=model.id)
        try:
            conflict = self._check_unique(
                model,
                name_taken=lambda: self._service.exists_excluding_id(
                    model.id, "Name", model.name
                ),
                code_taken=lambda: self._service.exists_excluding_id(
                    model.id, "Code", model.code
                ),
            )
            if conflict is not None:
                return conflict

            self._service.update(model)
        except Exception as exc:
            log.exception("product.update_failed")
            return HandlerResult.error(
                UPDATE_ERROR + str(exc), key=ERROR_KEY, value=model
            )

        try:
            self._cache.remove(cache_key(model.id))
        except Exception:
            # The write is committed; the stale entry expires with its TTL.
            log.exception("product.cache_invalidation_failed")
        else:
            log.info("product.cache_invalidated")
        return HandlerResult.ok(model)

    def delete(self, id: int) -> HandlerResult:
        try:
            self._service.delete(id)
            self._cache.remove(cache_key(id))
        except Exception:
            # Failure detail stays in the log, not in the response.
            logger.exception("product.delete_failed", product_id=id)
            return HandlerResult.error(DELETE_ERROR)
        return HandlerResult.ok()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(dto_cls: Type[CreateProductDTO], data: Mapping[str, Any]):
        if not isinstance(data, Mapping):
            logger.info("product.invalid_input", fields=[BODY_ERROR_KEY])
            return HandlerResult.invalid({BODY_ERROR_KEY: [BODY_NOT_OBJECT]}, value=data)
        try:
            return dto_cls.model_validate(dict(data))
        except ValidationError as exc:
            errors = validation_errors(exc)
            logger.info("product.invalid_input", fields=sorted(errors))
            return HandlerResult.invalid(errors, value=dict(data))

    @staticmethod
    def _check_unique(model, name_taken, code_taken) -> Optional[HandlerResult]:
        if name_taken():
            logger.warning("product.duplicate_name", name=model.name)
            return HandlerResult.conflict(
                EXISTS_KEY,
                f"The product name- '{model.name}' already exists",
                value=model,
            )
        if code_taken():
            logger.warning("product.duplicate_code", code=model.code)
            return HandlerResult.conflict(
                EXISTS_KEY,
                f"The product code- '{model.code}' already exists",
                value=model,
            )
        return None
