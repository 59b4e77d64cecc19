"""
Cache-Related Exceptions

All exceptions related to caching operations (Redis, local tier, codec).
"""

from object_cache.core.exceptions.base import ObjectCacheError


class CacheError(ObjectCacheError):
    """Base exception for cache-related errors."""
    pass


class CacheConnectionError(CacheError):
    """
    Raised when unable to connect to the remote store (Redis).

    Never escapes facade construction: the probe converts it into a
    degraded-mode reason.

    Common causes:
    - Redis server is down
    - Network connectivity issues
    - Incorrect host/port configuration
    - Authentication failure
    """
    pass


class CacheKeyError(CacheError):
    """
    Raised when a remote operation fails after a successful connection.

    Common causes:
    - Connection dropped mid-request
    - Operation timeout
    - INCRBY/DECRBY on a value that is not an integer
    - Memory limit exceeded
    """
    pass


class CacheSerializationError(CacheError):
    """
    Raised when a value cannot be encoded for the remote store.

    The remote tier stores JSON-shaped values; objects orjson cannot encode
    (sets, arbitrary class instances, dicts with non-string keys) are rejected
    before any command is sent.
    """
    pass
