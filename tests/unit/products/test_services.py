"""Unit tests for ProductService.

Covers:
- list_page: offset arithmetic and projection to DTOs.
- list_all / get: delegation and None pass-through.
- exists / exists_excluding_id: field-name mapping, unknown fields.
- create / update / delete: persistence and ProductNotFound.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from modules.products.dtos import CreateProductDTO, ProductOutputDTO, UpdateProductDTO
from modules.products.exceptions import InvalidLookupField, ProductNotFound
from modules.products.models import Product
from modules.products.services import ProductService

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    return MagicMock()


@pytest.fixture()
def service(mock_repo):
    return ProductService(repository=mock_repo)


def _make_product(id: int = 1, **overrides) -> Product:
    defaults = {
        "id": id,
        "code": f"P{id}",
        "name": f"Product {id}",
        "price": 19.99,
        "description": "",
        "is_active": True,
    }
    defaults.update(overrides)
    return Product(**defaults)


# ===========================================================================
# Queries
# ===========================================================================


class TestListPage:
    def test_first_page_starts_at_zero(self, service, mock_repo):
        mock_repo.list_page.return_value = ([_make_product(1)], 1)

        items, total = service.list_page(1, 4)

        mock_repo.list_page.assert_called_once_with(0, 4)
        assert total == 1
        assert items == [ProductOutputDTO.from_entity(_make_product(1))]

    def test_offset_for_later_pages(self, service, mock_repo):
        mock_repo.list_page.return_value = ([], 20)

        service.list_page(3, 4)

        mock_repo.list_page.assert_called_once_with(8, 4)


class TestListAll:
    def test_projects_every_product(self, service, mock_repo):
        mock_repo.list.return_value = [_make_product(1), _make_product(2)]

        result = service.list_all()

        assert [p.id for p in result] == [1, 2]
        assert all(isinstance(p, ProductOutputDTO) for p in result)


class TestGet:
    def test_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_product(3)

        result = service.get(3)

        assert result.id == 3
        mock_repo.get_by_id.assert_called_once_with(3)

    def test_missing_returns_none(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        assert service.get(3) is None


class TestExists:
    def test_maps_name_field(self, service, mock_repo):
        mock_repo.exists.return_value = True

        assert service.exists("Name", "Widget") is True
        mock_repo.exists.assert_called_once_with("name", "Widget")

    def test_maps_code_field_with_exclusion(self, service, mock_repo):
        mock_repo.exists.return_value = False

        assert service.exists_excluding_id(5, "Code", "W1") is False
        mock_repo.exists.assert_called_once_with("code", "W1", exclude_id=5)

    def test_unknown_field_raises(self, service, mock_repo):
        with pytest.raises(InvalidLookupField, match="Price"):
            service.exists("Price", "1")
        mock_repo.exists.assert_not_called()


# ===========================================================================
# Commands
# ===========================================================================


class TestCreate:
    def test_saves_and_returns_projection(self, service, mock_repo):
        def _save(product):
            product.id = 42
            return product

        mock_repo.save.side_effect = _save

        dto = CreateProductDTO(code="W1", name="Widget", price=9.99, is_active=True)
        result = service.create(dto)

        assert result.id == 42
        assert result.name == "Widget"
        assert result.is_active is True
        mock_repo.save.assert_called_once()


class TestUpdate:
    def test_overwrites_fields(self, service, mock_repo):
        existing = _make_product(7, description="Old")
        mock_repo.get_by_id.return_value = existing

        service.update(
            UpdateProductDTO(id=7, code="NEW7", name="Renamed", price=5.0)
        )

        saved = mock_repo.save.call_args.args[0]
        assert saved is existing
        assert (saved.code, saved.name, saved.price) == ("NEW7", "Renamed", 5.0)
        assert saved.description == ""

    def test_missing_raises(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(ProductNotFound):
            service.update(UpdateProductDTO(id=7, code="W1", name="Widget", price=1))
        mock_repo.save.assert_not_called()


class TestDelete:
    def test_success(self, service, mock_repo):
        mock_repo.delete.return_value = True

        service.delete(3)

        mock_repo.delete.assert_called_once_with(3)

    def test_missing_raises(self, service, mock_repo):
        mock_repo.delete.return_value = False

        with pytest.raises(ProductNotFound, match="3"):
            service.delete(3)
