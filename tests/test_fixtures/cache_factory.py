"""
Cache Test Factory

Creates remote stores and facades with various configurations for testing.
"""

from typing import Any
from unittest.mock import MagicMock

from object_cache.core.exceptions import CacheKeyError


class CacheTestFactory:
    """Factory for creating cache test objects."""

    @staticmethod
    def store_with_data(initial_data: dict[str, Any] | None = None):
        """Create an in-memory remote store holding initial data."""
        from tests.test_fixtures.in_memory_store import InMemoryStore

        return InMemoryStore(initial_data)

    @staticmethod
    def failing_store(error: Exception | None = None) -> MagicMock:
        """Create a remote store whose every command fails."""
        from object_cache.core.interfaces.cache import KeyValueStore

        if error is None:
            error = CacheKeyError("Redis connection lost", details={"command": "GET"})

        store = MagicMock(spec=KeyValueStore)
        for command in ("exists", "get", "set", "setex", "delete", "incrby", "decrby", "flushdb"):
            getattr(store, command).side_effect = error
        store.ping.return_value = False
        return store

    @staticmethod
    def connected_cache(settings, store=None):
        """Create a facade bound to a store (default: empty in-memory store)."""
        from object_cache.core.interfaces.cache import RemoteConnection
        from object_cache.infrastructure.cache.cache_manager import ObjectCache

        store = store if store is not None else CacheTestFactory.store_with_data()
        return ObjectCache(settings=settings, remote=RemoteConnection.connected(store))

    @staticmethod
    def degraded_cache(settings, reason: str = "Connection refused", registry=None):
        """Create a facade that runs local-only."""
        from object_cache.core.interfaces.cache import RemoteConnection
        from object_cache.infrastructure.cache.cache_manager import ObjectCache

        return ObjectCache(settings=settings, remote=RemoteConnection.degraded(reason), registry=registry)
