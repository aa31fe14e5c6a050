"""Unit tests for the Product model.

Covers:
- Creation defaults and __str__.
- Length validators on code / name / description.
- Partial unique constraints on code and name (alive rows only).
- Soft delete lifecycle (inherited from SoftDeleteModel).
"""

from __future__ import annotations

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from modules.products.models import Product

pytestmark = pytest.mark.unit


def _make_product(**overrides) -> Product:
    defaults = {"code": "KB01", "name": "Keyboard", "price": 49.9}
    defaults.update(overrides)
    return Product.objects.create(**defaults)


class TestProductCreation:
    def test_defaults(self):
        p = _make_product()
        assert isinstance(p.id, int)
        assert p.description == ""
        assert p.is_active is False
        assert p.deleted_at is None

    def test_str(self):
        assert str(_make_product()) == "KB01 - Keyboard"

    def test_ids_are_generated_sequentially(self):
        a = _make_product(code="A1", name="First")
        b = _make_product(code="B1", name="Second")
        assert b.id > a.id


class TestProductValidation:
    @pytest.mark.parametrize(
        "field, value",
        [
            ("code", "X"),
            ("code", "X" * 9),
            ("name", "N"),
            ("name", "N" * 101),
            ("description", "d" * 351),
        ],
    )
    def test_length_limits(self, field, value):
        product = Product(code="KB01", name="Keyboard", price=1.0)
        setattr(product, field, value)
        with pytest.raises(ValidationError) as exc_info:
            product.full_clean()
        assert field in exc_info.value.message_dict


class TestProductUniqueness:
    def test_duplicate_code_rejected_by_database(self):
        _make_product()
        with pytest.raises(IntegrityError), transaction.atomic():
            _make_product(name="Other name")

    def test_duplicate_name_rejected_by_database(self):
        _make_product()
        with pytest.raises(IntegrityError), transaction.atomic():
            _make_product(code="ZZ99")

    def test_deleted_product_frees_code_and_name(self):
        _make_product().delete()
        again = _make_product()
        assert again.pk is not None
        assert Product.objects.filter(code="KB01").count() == 2


class TestProductSoftDelete:
    def test_delete_sets_deleted_at(self):
        p = _make_product()
        p.delete()
        p.refresh_from_db()
        assert p.is_deleted

    def test_deleted_product_hidden_from_alive(self):
        p = _make_product()
        p.delete()
        assert not Product.objects.alive().filter(pk=p.pk).exists()
        assert Product.objects.dead().filter(pk=p.pk).exists()

    def test_second_delete_is_noop(self):
        p = _make_product()
        p.delete()
        assert p.delete() == (0, {})

    def test_queryset_delete_is_soft(self):
        _make_product()
        _make_product(code="MS01", name="Mouse")
        count, _ = Product.objects.all().delete()
        assert count == 2
        assert Product.objects.count() == 2
        assert Product.objects.alive().count() == 0
