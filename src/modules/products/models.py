"""Product model with code/name uniqueness.

Business rules implemented:
- ``code`` (2-8 chars) and ``name`` (2-100 chars) are unique among
  products that have not been deleted.
- ``description`` is optional, at most 350 chars.
- Delete is a soft delete via ``deleted_at`` (inherited from SoftDeleteModel).

The partial unique constraints are the authoritative guard against
duplicates; the request handler's existence probes only give the user an
early, readable error.
"""

from __future__ import annotations

from django.core.validators import MinLengthValidator
from django.db import models

from modules.core.models import SoftDeleteModel

CODE_MIN_LENGTH = 2
CODE_MAX_LENGTH = 8
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 350


class Product(SoftDeleteModel):
    """Product aggregate root."""

    code = models.CharField(
        max_length=CODE_MAX_LENGTH,
        validators=[MinLengthValidator(CODE_MIN_LENGTH)],
    )
    name = models.CharField(
        max_length=NAME_MAX_LENGTH,
        validators=[MinLengthValidator(NAME_MIN_LENGTH)],
    )
    price = models.FloatField()
    description = models.CharField(
        max_length=DESCRIPTION_MAX_LENGTH, blank=True, default=""
    )
    is_active = models.BooleanField(default=False)

    class Meta:
        db_table = "products"
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(
                fields=["code"],
                condition=models.Q(deleted_at__isnull=True),
                name="products_code_unique_alive",
            ),
            models.UniqueConstraint(
                fields=["name"],
                condition=models.Q(deleted_at__isnull=True),
                name="products_name_unique_alive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.code} - {self.name}"
