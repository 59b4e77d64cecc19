"""
Remote Store Protocol

This module defines the capability interface the cache facade expects from a
shared key-value backend, plus the result type produced when the backend is
probed at facade construction.

Architectural Decision: Protocol-based abstraction
- The facade depends on the capability set, not on redis-py
- Facilitates testing with in-memory implementations
- Type-safe interface with runtime checking
"""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """
    Capability interface over a remote key-value backend.

    Values cross this boundary as Python objects; implementations own the
    encode/decode step. Mutating calls return the backend's raw
    acknowledgement, which callers normalize with ``normalize_response``.

    Implementations:
    - RedisStore: Production Redis-backed store

    Raises:
        CacheKeyError: Any backend failure during a live operation
    """

    def ping(self) -> bool:
        """
        Check if the backend answers.

        Returns:
            bool: True if healthy, False otherwise
        """
        ...

    def exists(self, key: str) -> int:
        """
        Check if a key exists.

        Returns:
            int: 1 if the key exists, 0 otherwise
        """
        ...

    def get(self, key: str) -> Any:
        """
        Fetch and decode the value stored under key.

        Returns:
            The decoded value, or None if not found
        """
        ...

    def set(self, key: str, value: Any) -> Any:
        """Store value without expiration (SET)."""
        ...

    def setex(self, key: str, ttl: int, value: Any) -> Any:
        """Store value expiring after ttl seconds (SETEX)."""
        ...

    def delete(self, key: str) -> Any:
        """Remove key (DEL); the ack is the number of keys removed."""
        ...

    def incrby(self, key: str, amount: int) -> Any:
        """Atomically add amount to the integer at key (INCRBY)."""
        ...

    def decrby(self, key: str, amount: int) -> Any:
        """Atomically subtract amount from the integer at key (DECRBY)."""
        ...

    def flushdb(self) -> Any:
        """Remove every key of the selected logical database (FLUSHDB)."""
        ...

    def close(self) -> None:
        """Release the connection."""
        ...


@dataclass(frozen=True)
class RemoteConnection:
    """
    Outcome of probing the remote store at facade construction.

    Attributes:
        store: Connected store, or None when degraded
        available: True when the store answered the probe
        reason: Why the facade runs local-only (None when available)
    """

    store: KeyValueStore | None
    available: bool
    reason: str | None = None

    @classmethod
    def connected(cls, store: KeyValueStore) -> "RemoteConnection":
        return cls(store=store, available=True)

    @classmethod
    def degraded(cls, reason: str) -> "RemoteConnection":
        return cls(store=None, available=False, reason=reason)
