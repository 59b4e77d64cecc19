#!/usr/bin/env python3
"""
Two-Tier Object Cache

Architecture:
    ObjectCache (Public API)
        ├── KeyBuilder (salt + prefix + group + ":" + key)
        │   └── GroupRegistry (global / remote-excluded groups)
        ├── LocalCache (process-local mapping)
        ├── KeyValueStore (shared remote store, usually RedisStore)
        └── CacheObserver (hit/miss counters & logging)

Routing:
    An operation goes to the local tier when its group is remote-excluded or
    when the remote store was unreachable at construction; otherwise it goes
    to the remote store. Remote reads and writes are mirrored into the local
    tier.

Usage:
    cache = ObjectCache()
    cache.set("front-page", {"id": 1}, group="posts")
    cache.get("front-page", group="posts")
"""

import copy
import re
import time
from collections.abc import Iterable
from typing import Any

from object_cache.core.config.constants import (
    CACHE_MISS,
    DEFAULT_GROUP,
    KEY_GROUP_SEPARATOR,
    TENANT_PREFIX_SEPARATOR,
    CacheTier,
    Stage,
)
from object_cache.core.config.settings import Settings, get_settings
from object_cache.core.interfaces.cache import KeyValueStore, RemoteConnection
from object_cache.core.logging.logger import get_logger, log_stage
from object_cache.infrastructure.cache.factory import connect_remote_store
from object_cache.infrastructure.cache.redis_client import normalize_response
from object_cache.infrastructure.cache.stats import StatsReporter

logger = get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")


# =============================================================================
# LAYER 1: LOCAL STORAGE
# =============================================================================


class LocalCache:
    """
    Process-local mapping from derived key to value.

    Lives and dies with the facade instance. There is no eviction and no
    expiration: an entry stays until it is deleted, overwritten or cleared.

    Values are deep-copied on the way in and on the way out, so neither the
    writer nor a reader can mutate what is stored.
    """

    def __init__(self):
        self._cache: dict[str, Any] = {}

    def get(self, key: str) -> tuple[Any, bool]:
        """
        Look up a derived key.

        Returns:
            (value, found); value is None when not found
        """
        if key in self._cache:
            return copy.deepcopy(self._cache[key]), True
        return None, False

    def put(self, key: str, value: Any) -> None:
        self._cache[key] = copy.deepcopy(value)

    def delete(self, key: str) -> bool:
        """Returns True if deleted, False if not found."""
        if key in self._cache:
            del self._cache[key]
            return True
        return False

    def clear(self) -> None:
        self._cache.clear()

    def contains(self, key: str) -> bool:
        """Presence test; a stored False or None still counts."""
        return key in self._cache

    def keys(self) -> list[str]:
        return list(self._cache.keys())

    def items(self) -> list[tuple[str, Any]]:
        return list(self._cache.items())

    def size(self) -> int:
        return len(self._cache)


# =============================================================================
# LAYER 2: ROUTING POLICY
# =============================================================================


def _as_group_names(groups: str | Iterable[str]) -> set[str]:
    if isinstance(groups, str):
        return {groups}
    return {str(group) for group in groups}


class GroupRegistry:
    """
    Classifies groups as global, remote-excluded, or default.

    - Global groups are keyed with the global prefix (shared by every tenant)
    - Remote-excluded groups always live in the local tier

    Both sets only grow. Once the remote store is known to be unavailable,
    newly registered global groups are treated as remote-excluded instead.
    """

    def __init__(
        self,
        global_groups: Iterable[str] = (),
        non_persistent_groups: Iterable[str] = (),
    ):
        self._global_groups: set[str] = set(global_groups)
        self._no_remote_groups: set[str] = set(non_persistent_groups)
        self._remote_available = True

    @property
    def global_groups(self) -> frozenset[str]:
        return frozenset(self._global_groups)

    @property
    def non_persistent_groups(self) -> frozenset[str]:
        return frozenset(self._no_remote_groups)

    def is_global(self, group: str) -> bool:
        return group in self._global_groups

    def is_remote_excluded(self, group: str) -> bool:
        return group in self._no_remote_groups

    def add_global_groups(self, groups: str | Iterable[str]) -> None:
        """
        Register one group or several as global.

        Args:
            groups: A group name or an iterable of names
        """
        names = _as_group_names(groups)
        if self._remote_available:
            self._global_groups |= names
        else:
            self._no_remote_groups |= names

    def add_non_persistent_groups(self, groups: str | Iterable[str]) -> None:
        """
        Register one group or several as never reaching the remote store.

        Args:
            groups: A group name or an iterable of names
        """
        self._no_remote_groups |= _as_group_names(groups)

    def disable_remote(self) -> None:
        """
        Fold every global group into the remote-excluded set.

        Called once by the facade when the remote probe failed.
        """
        self._remote_available = False
        self._no_remote_groups |= self._global_groups


class KeyBuilder:
    """
    Derives the key actually used against a storage tier.

    Format: ``salt + prefix + group + ":" + key`` with every whitespace
    character removed. The prefix is the global prefix for global groups and
    the tenant prefix otherwise.
    """

    def __init__(
        self,
        registry: GroupRegistry,
        salt: str = "",
        global_prefix: str = "",
        tenant_prefix: str = "",
    ):
        self._registry = registry
        self.salt = salt
        self.global_prefix = global_prefix
        self.tenant_prefix = tenant_prefix

    def derive(self, key: Any, group: str | None = DEFAULT_GROUP) -> str:
        group = group or DEFAULT_GROUP
        prefix = self.global_prefix if self._registry.is_global(group) else self.tenant_prefix
        return _WHITESPACE.sub("", f"{self.salt}{prefix}{group}{KEY_GROUP_SEPARATOR}{key}")


# =============================================================================
# LAYER 3: OBSERVABILITY
# =============================================================================


class CacheObserver:
    """
    Tracks hit/miss counters and logs cache operations.

    Logging Strategy:
    - Local lookups: STAGE-2.1
    - Remote lookups: STAGE-2.2
    - Writes: STAGE-2.3
    - Deletes: STAGE-2.4
    - Counter updates: STAGE-2.5
    """

    def __init__(self, logger_instance=None):
        self._logger = logger_instance or logger
        self.cache_hits = 0
        self.cache_misses = 0

    def record_get(self, tier: CacheTier, key: str, hit: bool) -> None:
        stage = Stage.LOCAL_LOOKUP if tier is CacheTier.LOCAL else Stage.REMOTE_LOOKUP
        if hit:
            self.cache_hits += 1
            log_stage(self._logger, stage, "Cache hit", level="debug", tier=tier.value, cache_key=key)
        else:
            self.cache_misses += 1
            log_stage(self._logger, stage, "Cache miss", level="debug", tier=tier.value, cache_key=key)

    def record_write(self, operation: str, tier: CacheTier, key: str, success: bool) -> None:
        log_stage(
            self._logger,
            Stage.CACHE_WRITE,
            f"Cache {operation}",
            level="debug",
            tier=tier.value,
            cache_key=key,
            success=success,
        )

    def record_delete(self, tier: CacheTier, key: str, success: bool) -> None:
        log_stage(
            self._logger,
            Stage.CACHE_DELETE,
            "Cache delete",
            level="debug",
            tier=tier.value,
            cache_key=key,
            success=success,
        )

    def record_counter(self, tier: CacheTier, key: str, delta: int, success: bool) -> None:
        log_stage(
            self._logger,
            Stage.COUNTER_UPDATE,
            "Counter updated",
            level="debug",
            tier=tier.value,
            cache_key=key,
            delta=delta,
            success=success,
        )


def _as_number(value: Any) -> int | float:
    """Numeric reading of a stored counter; anything unusable counts as zero."""
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        for cast in (int, float):
            try:
                return cast(value)
            except ValueError:
                continue
    return 0


# =============================================================================
# LAYER 4: PUBLIC API
# =============================================================================


class ObjectCache:
    """
    Two-tier read/write cache facade.

    One instance per request or process. The remote store is probed exactly
    once, here in the constructor; if it is unreachable the instance stays
    local-only for its whole lifetime and records why in ``remote_status``.

    Existence preconditions (add on an existing key, replace on a missing
    key, get or delete on a missing key) are reported as ``False``. Backend
    faults after construction propagate as ``CacheKeyError``.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        remote: RemoteConnection | None = None,
        registry: GroupRegistry | None = None,
    ):
        """
        Initialize the facade.

        STAGE-0.0: Cache initialization

        Args:
            settings: Application settings (default: get_settings())
            remote: Pre-resolved remote connection (default: probe the
                configured backend)
            registry: Group registry (default: built from settings)
        """
        settings = settings or get_settings()
        cache_settings = settings.cache

        self._settings = settings
        self._remote = remote if remote is not None else connect_remote_store(settings)
        self._store: KeyValueStore | None = self._remote.store if self._remote.available else None
        self._multi_tenant = cache_settings.CACHE_MULTI_TENANT

        self._registry = registry or GroupRegistry(
            cache_settings.CACHE_GLOBAL_GROUPS,
            cache_settings.CACHE_NON_PERSISTENT_GROUPS,
        )
        if not self._remote.available:
            self._registry.disable_remote()

        if self._multi_tenant:
            global_prefix = ""
            tenant_prefix = f"{cache_settings.CACHE_TENANT_ID}{TENANT_PREFIX_SEPARATOR}"
        else:
            global_prefix = cache_settings.CACHE_NAMESPACE
            tenant_prefix = f"{cache_settings.CACHE_NAMESPACE}{TENANT_PREFIX_SEPARATOR}"

        self._keys = KeyBuilder(
            self._registry,
            salt=cache_settings.CACHE_KEY_SALT,
            global_prefix=global_prefix,
            tenant_prefix=tenant_prefix,
        )
        self._local = LocalCache()
        self._observer = CacheObserver()

        log_stage(
            logger,
            Stage.INITIALIZATION,
            "Object cache initialized",
            remote_available=self._remote.available,
            degraded_reason=self._remote.reason,
            multi_tenant=self._multi_tenant,
        )

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def remote_available(self) -> bool:
        return self._remote.available

    @property
    def remote_status(self) -> RemoteConnection:
        return self._remote

    @property
    def cache_hits(self) -> int:
        return self._observer.cache_hits

    @property
    def cache_misses(self) -> int:
        return self._observer.cache_misses

    @property
    def tenant_prefix(self) -> str:
        return self._keys.tenant_prefix

    @property
    def global_prefix(self) -> str:
        return self._keys.global_prefix

    @property
    def multi_tenant(self) -> bool:
        return self._multi_tenant

    @property
    def registry(self) -> GroupRegistry:
        return self._registry

    @property
    def local(self) -> LocalCache:
        return self._local

    # -------------------------------------------------------------------------
    # Routing
    # -------------------------------------------------------------------------

    def build_key(self, key: Any, group: str | None = DEFAULT_GROUP) -> str:
        """Derived key for key/group under the current tenant."""
        return self._keys.derive(key, group)

    def _use_local(self, group: str) -> bool:
        return self._registry.is_remote_excluded(group) or not self._remote.available

    def _write_remote(self, derived_key: str, value: Any, expiration: int) -> bool:
        expiration = abs(int(expiration))
        if expiration:
            result = normalize_response(self._store.setex(derived_key, expiration, value))
        else:
            result = normalize_response(self._store.set(derived_key, value))
        if result:
            self._local.put(derived_key, value)
        return result

    # -------------------------------------------------------------------------
    # Core Cache Operations
    # -------------------------------------------------------------------------

    def add(self, key: Any, value: Any, group: str = DEFAULT_GROUP, expiration: int = 0) -> bool:
        """
        Store value only if the key is not already present.

        Args:
            key: The key under which to store the value
            value: The value to store
            group: Group namespace for the key
            expiration: Seconds until expiry on the remote tier (0 = never)

        Returns:
            True on success, False if the key already exists
        """
        return self._add_or_replace(True, key, value, group, expiration)

    def replace(self, key: Any, value: Any, group: str = DEFAULT_GROUP, expiration: int = 0) -> bool:
        """
        Store value only if the key is already present.

        Returns:
            True on success, False if the key does not exist
        """
        return self._add_or_replace(False, key, value, group, expiration)

    def _add_or_replace(self, add: bool, key: Any, value: Any, group: str, expiration: int) -> bool:
        group = group or DEFAULT_GROUP
        derived_key = self.build_key(key, group)
        operation = "add" if add else "replace"

        if self._use_local(group):
            if add == self._local.contains(derived_key):
                self._observer.record_write(operation, CacheTier.LOCAL, derived_key, False)
                return False
            self._local.put(derived_key, value)
            self._observer.record_write(operation, CacheTier.LOCAL, derived_key, True)
            return True

        if add == bool(self._store.exists(derived_key)):
            self._observer.record_write(operation, CacheTier.REMOTE, derived_key, False)
            return False

        result = self._write_remote(derived_key, value, expiration)
        self._observer.record_write(operation, CacheTier.REMOTE, derived_key, result)
        return result

    def set(self, key: Any, value: Any, group: str = DEFAULT_GROUP, expiration: int = 0) -> bool:
        """
        Store value whether or not the key exists.

        Returns:
            True locally; the normalized acknowledgement remotely
        """
        group = group or DEFAULT_GROUP
        derived_key = self.build_key(key, group)

        if self._use_local(group):
            self._local.put(derived_key, value)
            self._observer.record_write("set", CacheTier.LOCAL, derived_key, True)
            return True

        result = self._write_remote(derived_key, value, expiration)
        self._observer.record_write("set", CacheTier.REMOTE, derived_key, result)
        return result

    def get(self, key: Any, group: str = DEFAULT_GROUP) -> Any:
        """
        Retrieve a value.

        STAGE-2.1: Local lookup
        STAGE-2.2: Remote lookup (EXISTS, then GET; mirrored locally)

        Returns:
            An independent copy of the stored value, or False on a miss
        """
        group = group or DEFAULT_GROUP
        derived_key = self.build_key(key, group)

        if self._use_local(group):
            value, found = self._local.get(derived_key)
            self._observer.record_get(CacheTier.LOCAL, derived_key, found)
            return value if found else CACHE_MISS

        if not self._store.exists(derived_key):
            self._observer.record_get(CacheTier.REMOTE, derived_key, False)
            return CACHE_MISS

        self._observer.record_get(CacheTier.REMOTE, derived_key, True)
        value = self._store.get(derived_key)
        self._local.put(derived_key, value)
        return copy.deepcopy(value)

    def delete(self, key: Any, group: str = DEFAULT_GROUP) -> bool:
        """
        Remove a value.

        A remote delete also purges the mirrored local entry.

        Returns:
            True if removed, False if the key was absent
        """
        group = group or DEFAULT_GROUP
        derived_key = self.build_key(key, group)

        if self._use_local(group):
            result = self._local.delete(derived_key)
            self._observer.record_delete(CacheTier.LOCAL, derived_key, result)
            return result

        result = normalize_response(self._store.delete(derived_key))
        self._local.delete(derived_key)
        self._observer.record_delete(CacheTier.REMOTE, derived_key, result)
        return result

    def increment(self, key: Any, offset: int = 1, group: str = DEFAULT_GROUP) -> bool:
        """
        Add offset to a numeric value.

        Locally a missing or non-numeric value counts as zero. Remotely the
        update is an atomic INCRBY and the new value is mirrored locally.

        Returns:
            True locally; the normalized INCRBY reply remotely
        """
        return self._update_counter(key, int(offset), group)

    def decrement(self, key: Any, offset: int = 1, group: str = DEFAULT_GROUP) -> bool:
        """
        Subtract offset from a numeric value.

        Returns:
            True locally; the normalized DECRBY reply remotely
        """
        return self._update_counter(key, -int(offset), group)

    def _update_counter(self, key: Any, delta: int, group: str) -> bool:
        group = group or DEFAULT_GROUP
        derived_key = self.build_key(key, group)

        if self._use_local(group):
            value, _ = self._local.get(derived_key)
            self._local.put(derived_key, _as_number(value) + delta)
            self._observer.record_counter(CacheTier.LOCAL, derived_key, delta, True)
            return True

        if delta >= 0:
            reply = self._store.incrby(derived_key, delta)
        else:
            reply = self._store.decrby(derived_key, -delta)
        result = normalize_response(reply)

        self._local.put(derived_key, int(_as_number(self._store.get(derived_key))))
        self._observer.record_counter(CacheTier.REMOTE, derived_key, delta, result)
        return result

    def flush(self, delay: int = 0) -> bool:
        """
        Invalidate every entry.

        STAGE-3.0: Flush

        Blocks for ``delay`` seconds first. The local tier is always cleared;
        the remote database is flushed when the remote store is available.

        Returns:
            The normalized FLUSHDB reply, or True when running local-only
        """
        delay = abs(int(delay))
        if delay:
            time.sleep(delay)

        self._local.clear()

        if not self._remote.available:
            log_stage(logger, Stage.FLUSH, "Local cache flushed", tier=CacheTier.LOCAL.value)
            return True

        result = normalize_response(self._store.flushdb())
        log_stage(logger, Stage.FLUSH, "Cache flushed", tier=CacheTier.REMOTE.value, success=result)
        return result

    # -------------------------------------------------------------------------
    # Tenants and Groups
    # -------------------------------------------------------------------------

    def switch_tenant(self, tenant_id: Any) -> bool:
        """
        Switch the tenant prefix used for tenant-scoped groups.

        Returns:
            True in multi-tenant deployments, False otherwise (no change)
        """
        if not self._multi_tenant:
            return False

        self._keys.tenant_prefix = f"{tenant_id}{TENANT_PREFIX_SEPARATOR}"
        log_stage(logger, Stage.TENANT_SWITCH, "Tenant switched", level="debug", tenant_id=str(tenant_id))
        return True

    def add_global_groups(self, groups: str | Iterable[str]) -> None:
        names = _as_group_names(groups)
        self._registry.add_global_groups(names)
        log_stage(logger, Stage.GROUP_REGISTRATION, "Global groups added", level="debug", groups=sorted(names))

    def add_non_persistent_groups(self, groups: str | Iterable[str]) -> None:
        names = _as_group_names(groups)
        self._registry.add_non_persistent_groups(names)
        log_stage(logger, Stage.GROUP_REGISTRATION, "Non-persistent groups added", level="debug", groups=sorted(names))

    # -------------------------------------------------------------------------
    # Local Tier Access
    # -------------------------------------------------------------------------

    def add_to_local(self, derived_key: str, value: Any) -> None:
        """Write straight into the local tier under an already-derived key."""
        self._local.put(derived_key, value)

    def get_from_local(self, key: Any, group: str = DEFAULT_GROUP) -> Any:
        """
        Read the local tier only, without touching hit/miss counters.

        Returns:
            The value, or False if not held locally
        """
        value, found = self._local.get(self.build_key(key, group))
        return value if found else CACHE_MISS

    # -------------------------------------------------------------------------
    # Monitoring
    # -------------------------------------------------------------------------

    def stats(self) -> dict[str, Any]:
        """Counters and routing state, see StatsReporter.snapshot()."""
        return StatsReporter(self).snapshot()

    def health_check(self) -> dict[str, Any]:
        """
        Perform health check on both tiers.

        Returns:
            Dict with health status for each tier
        """
        health = {
            "status": "healthy",
            "local": {"status": "healthy", "size": self._local.size()},
            "remote": None,
        }

        if not self._remote.available:
            health["status"] = "degraded"
            health["remote"] = {"status": "not_connected", "reason": self._remote.reason}
            return health

        check = getattr(self._store, "health_check", None)
        if callable(check):
            health["remote"] = check()
        else:
            health["remote"] = {"status": "healthy" if self._store.ping() else "unhealthy"}

        if health["remote"].get("status") != "healthy":
            health["status"] = "degraded"

        return health
