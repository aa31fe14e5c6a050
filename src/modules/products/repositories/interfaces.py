"""Product repository interface.

Extends ``IRepository[Product]`` with the paging and existence look-ups
needed by the listing pages and the code/name uniqueness probes.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional, Tuple

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def list_page(self, offset: int, limit: int) -> Tuple[List[Product], int]:
        """Return ``limit`` live products starting at ``offset`` plus the live total."""

    @abstractmethod
    def exists(self, field: str, value: str, exclude_id: Optional[int] = None) -> bool:
        """Whether a live product has ``field == value``, optionally ignoring one id."""
