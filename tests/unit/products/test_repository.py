"""Unit tests for ProductDjangoRepository.

Covers:
- get_by_id: found, missing, soft-deleted.
- list / list_page: ordering, paging, totals exclude deleted rows.
- exists: plain and id-excluding checks.
- save / delete: persistence and soft delete.
"""

from __future__ import annotations

import pytest

from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.repositories.interfaces import IProductRepository

pytestmark = pytest.mark.unit


def _make_product(code: str = "KB01", name: str = "Keyboard", **overrides) -> Product:
    return Product.objects.create(code=code, name=name, price=10.0, **overrides)


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


class TestInstantiation:
    def test_is_instance_of_interface(self, repo):
        assert isinstance(repo, IProductRepository)


class TestGetById:
    def test_found(self, repo):
        product = _make_product()
        assert repo.get_by_id(product.id) == product

    def test_missing(self, repo):
        assert repo.get_by_id(999) is None

    def test_soft_deleted_is_hidden(self, repo):
        product = _make_product()
        product.delete()
        assert repo.get_by_id(product.id) is None


class TestListing:
    def test_list_excludes_deleted(self, repo):
        keep = _make_product()
        _make_product(code="MS01", name="Mouse").delete()
        assert repo.list() == [keep]

    def test_list_page_slices_and_counts(self, repo):
        products = [_make_product(code=f"P{i}", name=f"Product {i}") for i in range(6)]

        items, total = repo.list_page(4, 4)

        assert total == 6
        assert items == products[4:]

    def test_list_page_past_end_is_empty(self, repo):
        _make_product()
        items, total = repo.list_page(8, 4)
        assert items == []
        assert total == 1


class TestExists:
    def test_matches_live_rows(self, repo):
        _make_product()
        assert repo.exists("name", "Keyboard") is True
        assert repo.exists("code", "NOPE") is False

    def test_ignores_deleted_rows(self, repo):
        _make_product().delete()
        assert repo.exists("code", "KB01") is False

    def test_excludes_given_id(self, repo):
        own = _make_product()
        assert repo.exists("name", "Keyboard", exclude_id=own.id) is False

    def test_other_record_still_collides(self, repo):
        _make_product()
        other = _make_product(code="MS01", name="Mouse")
        assert repo.exists("name", "Keyboard", exclude_id=other.id) is True


class TestSaveAndDelete:
    def test_save_persists(self, repo):
        product = repo.save(Product(code="NEW1", name="New", price=1.5))
        assert product.pk is not None
        assert Product.objects.get(pk=product.pk).name == "New"

    def test_delete_soft_deletes(self, repo):
        product = _make_product()
        assert repo.delete(product.id) is True
        assert Product.objects.get(pk=product.pk).is_deleted

    def test_delete_missing_returns_false(self, repo):
        assert repo.delete(999) is False
