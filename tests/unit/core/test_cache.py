"""Unit tests for the DjangoCache adapter."""

from __future__ import annotations

import pytest
from freezegun import freeze_time

from modules.core.cache import DjangoCache, ICache

pytestmark = pytest.mark.unit


@pytest.fixture()
def adapter():
    return DjangoCache()


class TestDjangoCache:
    def test_satisfies_protocol(self, adapter):
        assert isinstance(adapter, ICache)

    def test_miss(self, adapter):
        assert adapter.try_get("Product_1") == (False, None)

    def test_set_then_get(self, adapter):
        adapter.set("Product_1", {"id": 1}, 600)
        assert adapter.try_get("Product_1") == (True, {"id": 1})

    def test_falsy_values_are_hits(self, adapter):
        adapter.set("Product_2", None, 600)
        assert adapter.try_get("Product_2") == (True, None)

    def test_remove(self, adapter):
        adapter.set("Product_1", "x", 600)
        adapter.remove("Product_1")
        assert adapter.try_get("Product_1") == (False, None)

    def test_remove_missing_key_is_noop(self, adapter):
        adapter.remove("Product_404")
        assert adapter.try_get("Product_404") == (False, None)

    def test_entry_expires_after_ttl(self, adapter):
        with freeze_time("2024-01-01 12:00:00") as frozen:
            adapter.set("Product_1", "x", 600)
            frozen.tick(599)
            assert adapter.try_get("Product_1") == (True, "x")
            frozen.tick(2)
            assert adapter.try_get("Product_1") == (False, None)

    def test_read_does_not_extend_ttl(self, adapter):
        with freeze_time("2024-01-01 12:00:00") as frozen:
            adapter.set("Product_1", "x", 600)
            frozen.tick(500)
            adapter.try_get("Product_1")
            frozen.tick(101)
            assert adapter.try_get("Product_1") == (False, None)
