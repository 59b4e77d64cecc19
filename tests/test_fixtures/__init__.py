"""
Test Fixtures Package

Shared test utilities and helpers for consistent testing across all modules.
"""

from .cache_factory import CacheTestFactory
from .fake_redis_client import FakeRedisClient
from .in_memory_store import InMemoryStore

__all__ = ["CacheTestFactory", "FakeRedisClient", "InMemoryStore"]
