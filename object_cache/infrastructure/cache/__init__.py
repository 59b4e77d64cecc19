"""
Cache Module

Provides the two-tier object cache (local mapping + remote Redis store).
"""

from .cache_manager import (
    CacheObserver,
    GroupRegistry,
    KeyBuilder,
    LocalCache,
    ObjectCache,
)
from .factory import RemoteStoreFactory, connect_remote_store
from .redis_client import RedisStore, ValueCodec, normalize_response
from .stats import StatsReporter

__all__ = [
    "ObjectCache",
    "LocalCache",
    "GroupRegistry",
    "KeyBuilder",
    "CacheObserver",
    "RedisStore",
    "ValueCodec",
    "normalize_response",
    "RemoteStoreFactory",
    "connect_remote_store",
    "StatsReporter",
]
