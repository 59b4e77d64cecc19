"""
Two-tier object cache: a shared Redis store in front of a process-local
fallback, with group-based routing and tenant-scoped keys.
"""

from object_cache.api import (
    cache_add,
    cache_add_global_groups,
    cache_add_non_persistent_groups,
    cache_close,
    cache_decr,
    cache_delete,
    cache_flush,
    cache_get,
    cache_incr,
    cache_init,
    cache_replace,
    cache_set,
    cache_switch_tenant,
)
from object_cache.infrastructure.cache.cache_manager import GroupRegistry, ObjectCache

__version__ = "1.0.0"

__all__ = [
    "ObjectCache",
    "GroupRegistry",
    "cache_init",
    "cache_close",
    "cache_add",
    "cache_replace",
    "cache_set",
    "cache_get",
    "cache_delete",
    "cache_incr",
    "cache_decr",
    "cache_flush",
    "cache_switch_tenant",
    "cache_add_global_groups",
    "cache_add_non_persistent_groups",
]
