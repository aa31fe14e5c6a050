"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation (shape validation).
- ``UpdateProductDTO``: input for updates; same shape plus the record ``id``.
- ``ProductOutputDTO``: presentation projection returned by the service
  and stored in the detail cache.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from modules.products.models import (
    CODE_MAX_LENGTH,
    CODE_MIN_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
)

if TYPE_CHECKING:
    from modules.products.models import Product


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``code``: required, 2-8 chars.
    - ``name``: required, 2-100 chars.
    - ``price``: required finite float.
    - ``description``: optional, at most 350 chars.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    code: str = Field(min_length=CODE_MIN_LENGTH, max_length=CODE_MAX_LENGTH)
    name: str = Field(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    price: float = Field(allow_inf_nan=False)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    is_active: bool = False

    @field_validator("description", mode="before")
    @classmethod
    def none_description_is_empty(cls, v: Optional[str]) -> str:
        return "" if v is None else v


class UpdateProductDTO(CreateProductDTO):
    """Immutable DTO for product update requests (full replacement)."""

    id: int


def validation_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """Flatten a Pydantic ``ValidationError`` into ``{field: [messages]}``."""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "__all__"
        errors.setdefault(field, []).append(error["msg"])
    return errors


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable projection of a product for API responses and caching."""

    model_config = ConfigDict(frozen=True)

    id: int
    code: str
    name: str
    price: float
    description: str
    is_active: bool

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        """Build an output DTO from a Product model instance."""
        return cls(
            id=product.id,
            code=product.code,
            name=product.name,
            price=product.price,
            description=product.description,
            is_active=product.is_active,
        )
