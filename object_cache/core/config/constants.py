"""
System Constants and Enumerations

This module defines system-wide constants and enumerations used across
the object cache.

Architectural Decision: Centralized constants for maintainability
- Single source of truth for default group membership and key format
- Type-safe enums for stage identifiers and cache tiers
- Easy to update and track changes
"""

from enum import Enum

# ============================================================================
# Stage Identifiers (for logging)
# ============================================================================


class Stage(str, Enum):
    """
    Cache processing stages for structured logging.

    Format: {SEQUENCE}_{DESCRIPTIVE_NAME}

    Each stage represents a phase of a cache operation so that logs can be
    followed without reading the code.
    """

    INITIALIZATION = "0.0_INITIALIZATION"
    REMOTE_PROBE = "0.1_REMOTE_PROBE"
    LOCAL_LOOKUP = "2.1_LOCAL_LOOKUP"
    REMOTE_LOOKUP = "2.2_REMOTE_LOOKUP"
    CACHE_WRITE = "2.3_CACHE_WRITE"
    CACHE_DELETE = "2.4_CACHE_DELETE"
    COUNTER_UPDATE = "2.5_COUNTER_UPDATE"
    FLUSH = "3.0_FLUSH"
    TENANT_SWITCH = "4.0_TENANT_SWITCH"
    GROUP_REGISTRATION = "4.1_GROUP_REGISTRATION"


# ============================================================================
# Cache Tiers
# ============================================================================


class CacheTier(str, Enum):
    """
    Storage tiers an operation can be routed to.

    LOCAL: Process-local mapping (never shared, lives with the facade)
    REMOTE: Shared Redis store
    """

    LOCAL = "local"
    REMOTE = "remote"


class CacheBackend(str, Enum):
    """
    Remote store implementations selectable from configuration.

    REDIS: Redis server reached over TCP
    NONE: No remote store, facade runs local-only
    """

    REDIS = "redis"
    NONE = "none"


# ============================================================================
# Key Format
# ============================================================================

DEFAULT_GROUP = "default"
KEY_GROUP_SEPARATOR = ":"
TENANT_PREFIX_SEPARATOR = ":"

DEFAULT_NAMESPACE = "wp_"
DEFAULT_TENANT_ID = "1"

# ============================================================================
# Default Group Membership
# ============================================================================

# Groups shared by every tenant (keyed with the global prefix)
DEFAULT_GLOBAL_GROUPS = (
    "users",
    "userlogins",
    "usermeta",
    "site-options",
    "site-lookup",
    "blog-lookup",
    "blog-details",
    "rss",
)

# Groups that never reach the remote store
DEFAULT_NON_PERSISTENT_GROUPS = (
    "comment",
    "counts",
)

# ============================================================================
# Remote Store
# ============================================================================

REDIS_DEFAULT_HOST = "127.0.0.1"
REDIS_DEFAULT_PORT = 6379

# Status payload Redis returns for successful SET/SETEX/FLUSHDB
REDIS_STATUS_OK = "OK"

# Miss sentinel returned by get() and get_from_local()
CACHE_MISS = False
