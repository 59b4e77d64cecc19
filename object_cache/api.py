"""
Public Cache Functions

Function-style surface over ObjectCache. There is no module-level instance:
``cache_init()`` builds a facade and every other function takes it as its
first argument.

Usage:
    from object_cache.api import cache_get, cache_init, cache_set

    cache = cache_init()
    cache_set(cache, "front-page", {"id": 1}, "posts")
    cache_get(cache, "front-page", "posts")
"""

from collections.abc import Iterable
from typing import Any

from object_cache.core.config.settings import Settings, get_settings
from object_cache.core.logging.logger import setup_logging
from object_cache.infrastructure.cache.cache_manager import ObjectCache

_logging_configured = False


def cache_init(settings: Settings | None = None, configure_logging: bool = True) -> ObjectCache:
    """
    Create a facade and probe the configured remote store.

    The first call also configures structlog from LOG_LEVEL / LOG_FORMAT,
    unless ``configure_logging`` is False because the host already did.

    Args:
        settings: Application settings (default: get_settings())
        configure_logging: Configure structlog on first use

    Returns:
        ObjectCache: New, independent facade
    """
    global _logging_configured

    settings = settings or get_settings()
    if configure_logging and not _logging_configured:
        setup_logging(settings.logging.LOG_LEVEL, settings.logging.LOG_FORMAT)
        _logging_configured = True

    return ObjectCache(settings=settings)


def cache_close(cache: ObjectCache) -> bool:
    """
    Close the cache.

    The remote connection is left to the client's pool; this always succeeds.
    """
    return True


def cache_add(cache: ObjectCache, key: Any, value: Any, group: str = "", expiration: int = 0) -> bool:
    return cache.add(key, value, group, expiration)


def cache_replace(cache: ObjectCache, key: Any, value: Any, group: str = "", expiration: int = 0) -> bool:
    return cache.replace(key, value, group, expiration)


def cache_set(cache: ObjectCache, key: Any, value: Any, group: str = "", expiration: int = 0) -> bool:
    return cache.set(key, value, group, expiration)


def cache_get(cache: ObjectCache, key: Any, group: str = "") -> Any:
    """Returns the cached value, or False on a miss."""
    return cache.get(key, group)


def cache_delete(cache: ObjectCache, key: Any, group: str = "", delay_hint: int = 0) -> bool:
    """
    Remove a value.

    ``delay_hint`` is accepted for call-site compatibility and ignored.
    """
    return cache.delete(key, group)


def cache_incr(cache: ObjectCache, key: Any, offset: int = 1, group: str = "") -> bool:
    return cache.increment(key, offset, group)


def cache_decr(cache: ObjectCache, key: Any, offset: int = 1, group: str = "") -> bool:
    return cache.decrement(key, offset, group)


def cache_flush(cache: ObjectCache, delay: int = 0) -> bool:
    return cache.flush(delay)


def cache_switch_tenant(cache: ObjectCache, tenant_id: Any) -> bool:
    return cache.switch_tenant(tenant_id)


def cache_add_global_groups(cache: ObjectCache, groups: str | Iterable[str]) -> None:
    cache.add_global_groups(groups)


def cache_add_non_persistent_groups(cache: ObjectCache, groups: str | Iterable[str]) -> None:
    cache.add_non_persistent_groups(groups)
