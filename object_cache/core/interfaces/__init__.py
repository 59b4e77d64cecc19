"""
Core Interfaces Module

Protocols for components the cache facade depends on, enabling dependency
injection and in-memory test doubles.

Components:
-----------
- **cache.py**: KeyValueStore protocol and the RemoteConnection probe result

Usage:
------
```python
from object_cache.core.interfaces import KeyValueStore

def warm(store: KeyValueStore, key: str) -> bool:
    return bool(store.exists(key))
```
"""

from object_cache.core.interfaces.cache import KeyValueStore, RemoteConnection

__all__ = [
    "KeyValueStore",
    "RemoteConnection",
]
