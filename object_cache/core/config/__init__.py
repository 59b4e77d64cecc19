"""
Configuration Module

This module provides centralized, type-safe configuration management
for the object cache.

Components:
-----------
- **settings.py**: Pydantic-based configuration with environment variable loading
- **constants.py**: Default group membership, key format and enums

Usage:
------
```python
from object_cache.core.config import get_settings
from object_cache.core.config.constants import CacheTier, Stage

settings = get_settings()
redis_host = settings.redis.REDIS_HOST
salt = settings.cache.CACHE_KEY_SALT
```

Environment Variables:
---------------------
Configuration is loaded from environment variables or `.env` file:

```bash
# Remote store
REDIS_HOST=127.0.0.1
REDIS_PORT=6379
REDIS_DB=2
CACHE_BACKEND=redis

# Key derivation
CACHE_KEY_SALT=site-a
CACHE_NAMESPACE=wp_
CACHE_MULTI_TENANT=true
CACHE_TENANT_ID=1

# Logging
LOG_LEVEL=INFO
LOG_FORMAT=json
```

Testing:
-------
```python
import os
from object_cache.core.config import reload_settings

os.environ["CACHE_BACKEND"] = "none"
settings = reload_settings()
assert settings.cache.CACHE_BACKEND == "none"
```
"""

from object_cache.core.config.constants import (
    CACHE_MISS,
    DEFAULT_GLOBAL_GROUPS,
    DEFAULT_GROUP,
    DEFAULT_NON_PERSISTENT_GROUPS,
    REDIS_STATUS_OK,
    CacheBackend,
    CacheTier,
    Stage,
)
from object_cache.core.config.settings import Settings, get_settings, reload_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "reload_settings",
    # Enums
    "Stage",
    "CacheTier",
    "CacheBackend",
    # Defaults
    "CACHE_MISS",
    "DEFAULT_GROUP",
    "DEFAULT_GLOBAL_GROUPS",
    "DEFAULT_NON_PERSISTENT_GROUPS",
    "REDIS_STATUS_OK",
]
