"""Cache abstraction injected into request handlers.

Handlers depend on ``ICache`` rather than on ``django.core.cache`` so that
tests can hand them an in-memory double and count hits and misses.
Expiry is owned by the backend: an entry whose TTL has elapsed is simply
reported as absent.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import structlog
from django.core.cache import caches

logger = structlog.get_logger(__name__)

_MISSING = object()


@runtime_checkable
class ICache(Protocol):
    """Key/value cache with per-entry time-to-live."""

    def try_get(self, key: str) -> tuple[bool, Any]:
        """Return ``(True, value)`` on a hit, ``(False, None)`` otherwise."""
        ...

    def set(self, key: str, value: Any, ttl: int) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds."""
        ...

    def remove(self, key: str) -> None:
        """Drop ``key``; absent keys are ignored."""
        ...


class DjangoCache:
    """``ICache`` backed by one of the configured Django cache aliases.

    Works with any backend in ``settings.CACHES`` (Redis via
    ``django-redis`` in deployment, ``LocMemCache`` in tests).
    """

    def __init__(self, alias: str = "default") -> None:
        self._alias = alias

    @property
    def _backend(self):
        # ``caches[alias]`` is thread-local; resolve per call.
        return caches[self._alias]

    def try_get(self, key: str) -> tuple[bool, Any]:
        value = self._backend.get(key, _MISSING)
        if value is _MISSING:
            return False, None
        return True, value

    def set(self, key: str, value: Any, ttl: int) -> None:
        self._backend.set(key, value, timeout=ttl)
        logger.debug("cache.set", key=key, ttl=ttl)

    def remove(self, key: str) -> None:
        self._backend.delete(key)
        logger.debug("cache.removed", key=key)
