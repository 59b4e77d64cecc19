"""
Pytest Configuration and Shared Test Fixtures

This module provides pytest configuration and reusable fixtures for all tests.
All fixtures defined here are automatically available to all test files.
"""

import os
import sys

import pytest

# Add project root to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def cache_settings():
    """
    Single-tenant settings with defaults, isolated from any .env file.

    Namespace "wp_": tenant prefix "wp_:", global prefix "wp_".
    """
    from object_cache.core.config.settings import Settings

    return Settings(_env_file=None, CACHE_BACKEND="redis", CACHE_MULTI_TENANT=False, CACHE_KEY_SALT="")


@pytest.fixture
def multi_tenant_settings():
    """Multi-tenant settings starting on tenant "1"."""
    from object_cache.core.config.settings import Settings

    return Settings(
        _env_file=None,
        CACHE_BACKEND="redis",
        CACHE_MULTI_TENANT=True,
        CACHE_TENANT_ID="1",
        CACHE_KEY_SALT="",
    )


@pytest.fixture
def local_only_settings():
    """Settings that disable the remote store."""
    from object_cache.core.config.settings import Settings

    return Settings(_env_file=None, CACHE_BACKEND="none", CACHE_MULTI_TENANT=False, CACHE_KEY_SALT="")


# ============================================================================
# Environment-Based Integration Toggles
# ============================================================================


@pytest.fixture(scope="session")
def use_real_redis():
    """Check if real Redis should be used for integration tests."""
    return os.getenv("USE_REAL_REDIS", "0").lower() in ("1", "true", "yes")


# ============================================================================
# In-Memory Remote Store
# ============================================================================


@pytest.fixture
def in_memory_store():
    """Empty in-memory remote store."""
    from tests.test_fixtures.in_memory_store import InMemoryStore

    return InMemoryStore()


# ============================================================================
# Facade Fixtures
# ============================================================================


@pytest.fixture
def remote_cache(cache_settings, in_memory_store):
    """Facade connected to the in-memory remote store."""
    from object_cache.core.interfaces.cache import RemoteConnection
    from object_cache.infrastructure.cache.cache_manager import ObjectCache

    return ObjectCache(settings=cache_settings, remote=RemoteConnection.connected(in_memory_store))


@pytest.fixture
def local_cache(cache_settings):
    """Facade running local-only because the remote probe failed."""
    from object_cache.core.interfaces.cache import RemoteConnection
    from object_cache.infrastructure.cache.cache_manager import ObjectCache

    return ObjectCache(settings=cache_settings, remote=RemoteConnection.degraded("Connection refused"))


@pytest.fixture
def multi_tenant_cache(multi_tenant_settings, in_memory_store):
    """Multi-tenant facade connected to the in-memory remote store."""
    from object_cache.core.interfaces.cache import RemoteConnection
    from object_cache.infrastructure.cache.cache_manager import ObjectCache

    return ObjectCache(settings=multi_tenant_settings, remote=RemoteConnection.connected(in_memory_store))


@pytest.fixture
def fake_redis_client():
    """String-only Redis client double."""
    from tests.test_fixtures.fake_redis_client import FakeRedisClient

    return FakeRedisClient()


@pytest.fixture
def redis_store_cache(cache_settings, fake_redis_client):
    """Facade over a real RedisStore (and ValueCodec) wrapping the fake client."""
    from object_cache.core.interfaces.cache import RemoteConnection
    from object_cache.infrastructure.cache.cache_manager import ObjectCache
    from object_cache.infrastructure.cache.redis_client import RedisStore

    store = RedisStore.from_client(fake_redis_client, cache_settings)
    return ObjectCache(settings=cache_settings, remote=RemoteConnection.connected(store))
