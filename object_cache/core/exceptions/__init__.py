"""
Exception Module

Structured exception hierarchy for the object cache.

Module Structure:
-----------------
- **base.py**: ObjectCacheError base class + ConfigurationError
- **cache.py**: Cache-related exceptions (Redis connection, live operations)

Usage:
------
```python
from object_cache.core.exceptions import CacheKeyError, ObjectCacheError
from object_cache.core.exceptions.cache import CacheConnectionError
```

Boolean results, not exceptions, report existence-precondition failures
(add on an existing key, replace on a missing key, get/delete on a missing
key). Exceptions are reserved for backend faults during a live operation.
"""

from object_cache.core.exceptions.base import ConfigurationError, ObjectCacheError
from object_cache.core.exceptions.cache import (
    CacheConnectionError,
    CacheError,
    CacheKeyError,
    CacheSerializationError,
)

__all__ = [
    # Base
    "ObjectCacheError",
    "ConfigurationError",
    # Cache
    "CacheError",
    "CacheConnectionError",
    "CacheKeyError",
    "CacheSerializationError",
]
