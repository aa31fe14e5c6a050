from __future__ import annotations

from typing import Any, Dict, Tuple
from unittest.mock import MagicMock

import pytest

from rest_framework.test import APIClient


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_cache():
    """LocMemCache outlives a test; start every test from an empty cache."""
    from django.core.cache import cache as django_cache

    django_cache.clear()
    yield
    django_cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def auth_client():
    """APIClient with a force-authenticated Django user."""
    from django.contrib.auth import get_user_model

    client = APIClient()
    user = get_user_model().objects.create_user(
        username="testuser", password="testpass123"
    )
    client.force_authenticate(user=user)
    return client


class MemoryCache:
    """In-process ``ICache`` double that records every call."""

    def __init__(self) -> None:
        self.store: Dict[str, Any] = {}
        self.ttls: Dict[str, int] = {}
        self.gets = 0
        self.sets = 0
        self.removes = 0

    def try_get(self, key: str) -> Tuple[bool, Any]:
        self.gets += 1
        if key in self.store:
            return True, self.store[key]
        return False, None

    def set(self, key: str, value: Any, ttl: int) -> None:
        self.sets += 1
        self.store[key] = value
        self.ttls[key] = ttl

    def remove(self, key: str) -> None:
        self.removes += 1
        self.store.pop(key, None)


@pytest.fixture()
def memory_cache():
    return MemoryCache()


@pytest.fixture()
def mock_service():
    from modules.products.services import IProductService

    service = MagicMock(spec=IProductService)
    service.exists.return_value = False
    service.exists_excluding_id.return_value = False
    return service


@pytest.fixture()
def handler(mock_service, memory_cache):
    from modules.products.handlers import ProductRequestHandler

    return ProductRequestHandler(service=mock_service, cache=memory_cache)
