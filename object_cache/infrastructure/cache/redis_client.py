"""
Redis Remote Store Adapter

Architecture:
    RedisStore (Public API, implements KeyValueStore)
        ├── ConnectionManager (Connection lifecycle, one-time probe)
        ├── OperationExecutor (Command execution with error handling)
        ├── ValueCodec (Encode/decode boundary for values)
        └── HealthMonitor (Ping latency)

    normalize_response() turns any backend acknowledgement into a bool.

Only the commands the facade needs are exposed: EXISTS, GET, SET, SETEX,
DEL, INCRBY, DECRBY, FLUSHDB.
"""

import time
from typing import Any

import orjson
import redis
from redis.exceptions import RedisError, ResponseError

from object_cache.core.config.constants import REDIS_STATUS_OK
from object_cache.core.exceptions import (
    CacheConnectionError,
    CacheKeyError,
    CacheSerializationError,
)
from object_cache.core.logging.logger import get_logger, get_request_id

logger = get_logger(__name__)

_COUNTER_COMMANDS = ("INCRBY", "DECRBY")


# =============================================================================
# LAYER 1: RESPONSE NORMALIZATION
# Single boolean success contract for every backend acknowledgement
# =============================================================================


def normalize_response(response: Any) -> bool:
    """
    Convert a backend acknowledgement into a success flag.

    Mapping:
    - bool: returned as-is
    - int/float: truthiness (DEL 1 → True, DEL 0 → False)
    - str/bytes: "OK" status → True, numeric text → truthiness, else False
    - object with ``payload`` / ``get_payload()``: True only for "OK"
    - anything else (None, lists, arbitrary objects): False

    Args:
        response: Raw reply from the backend

    Returns:
        True if the reply signals success
    """
    if isinstance(response, bool):
        return response

    if isinstance(response, (int, float)):
        return bool(response)

    if isinstance(response, bytes):
        try:
            response = response.decode("utf-8")
        except UnicodeDecodeError:
            return False

    if isinstance(response, str):
        if response == REDIS_STATUS_OK:
            return True
        try:
            return bool(float(response))
        except ValueError:
            return False

    get_payload = getattr(response, "get_payload", None)
    if callable(get_payload):
        return get_payload() == REDIS_STATUS_OK

    if hasattr(response, "payload"):
        return response.payload == REDIS_STATUS_OK

    return False


# =============================================================================
# LAYER 2: VALUE CODEC
# Encode/decode boundary between Python values and Redis strings
# =============================================================================


class ValueCodec:
    """
    Converts Python values to Redis strings and back.

    Plain strings go on the wire as their own text so INCRBY/DECRBY and
    other clients see them unchanged; numbers encode to their decimal text.
    Everything else (dicts, lists, bools, None) is JSON encoded with orjson.

    A string whose raw text would read back as another JSON value (for
    example "true" or "[1]") is JSON encoded as well, so it round-trips as a
    string. Numeric text is the exception: it is stored raw and reads back
    as a number, exactly like a counter after INCRBY.

    Values that are not valid JSON (written by other clients) decode to the
    raw string.
    """

    @staticmethod
    def encode(value: Any) -> str:
        """
        Encode a value for storage.

        Raises:
            CacheSerializationError: If orjson cannot encode the value
        """
        if isinstance(value, str) and ValueCodec._is_raw_safe(value):
            return value
        try:
            return orjson.dumps(value).decode("utf-8")
        except TypeError as e:
            raise CacheSerializationError(
                message=f"Value of type {type(value).__name__} cannot be stored remotely",
                details={"value_type": type(value).__name__, "error": str(e)},
            ) from e

    @staticmethod
    def _is_raw_safe(text: str) -> bool:
        try:
            parsed = orjson.loads(text)
        except orjson.JSONDecodeError:
            return True
        return isinstance(parsed, (int, float)) and not isinstance(parsed, bool)

    @staticmethod
    def decode(raw: str | bytes | None) -> Any:
        """Decode a stored string, or return None for a missing key."""
        if raw is None:
            return None
        try:
            return orjson.loads(raw)
        except orjson.JSONDecodeError:
            return raw.decode("utf-8") if isinstance(raw, bytes) else raw


# =============================================================================
# LAYER 3: CONNECTION MANAGEMENT
# =============================================================================


class ConnectionManager:
    """
    Manages the Redis connection lifecycle.

    Responsibility: Client construction, database selection and the one-time
    reachability probe performed when the facade is built.
    """

    def __init__(self, settings):
        """
        Initialize connection manager.

        Args:
            settings: Application settings
        """
        self._settings = settings
        self._client: redis.Redis | None = None
        self._is_connected = False

    def connect(self) -> redis.Redis:
        """
        Create the client and verify it with PING.

        STAGE-0.1: Remote probe

        Returns:
            redis.Redis: Connected Redis client

        Raises:
            CacheConnectionError: If the server cannot be reached
        """
        if self._is_connected and self._client:
            return self._client

        redis_settings = self._settings.redis

        try:
            self._client = redis.Redis(
                host=redis_settings.REDIS_HOST,
                port=redis_settings.REDIS_PORT,
                db=redis_settings.REDIS_DB or 0,
                password=redis_settings.REDIS_PASSWORD,
                socket_connect_timeout=redis_settings.REDIS_SOCKET_CONNECT_TIMEOUT,
                socket_timeout=redis_settings.REDIS_SOCKET_TIMEOUT,
                decode_responses=True,
            )
            self._client.ping()
            self._is_connected = True

            logger.info(
                "Redis connected successfully",
                stage="REDIS.2",
                host=redis_settings.REDIS_HOST,
                port=redis_settings.REDIS_PORT,
                db=redis_settings.REDIS_DB,
            )
            return self._client

        except RedisError as e:
            self._client = None
            raise CacheConnectionError.from_exception(
                e,
                message=f"Failed to connect to Redis: {e}",
                host=redis_settings.REDIS_HOST,
                port=redis_settings.REDIS_PORT,
            ) from e

    def adopt(self, client: redis.Redis) -> redis.Redis:
        """
        Take over an already-connected client (shared pools, tests).

        No probe is sent; the caller vouches for the connection.
        """
        self._client = client
        self._is_connected = True
        return client

    def disconnect(self) -> None:
        """Close the client and its pool."""
        if self._client:
            self._client.close()
        self._client = None
        self._is_connected = False

        logger.info("Redis disconnected", stage="REDIS.3")

    def get_client(self) -> redis.Redis | None:
        """Get the Redis client instance."""
        return self._client

    def is_connected(self) -> bool:
        """Check if connected to Redis."""
        return self._is_connected


# =============================================================================
# LAYER 4: OPERATION EXECUTION
# =============================================================================


class OperationExecutor:
    """
    Executes Redis commands with consistent error handling.

    Error Handling Strategy:
    - Catch RedisError exceptions
    - Log error with context (stage, key)
    - Raise CacheKeyError with details

    Nothing is retried; a fault after connection propagates to the caller.
    """

    def __init__(self, redis_client: redis.Redis):
        self._redis = redis_client

    def _fail(self, command: str, key: str | None, error: RedisError) -> CacheKeyError:
        failure = CacheKeyError(
            message=f"Redis {command} failed: {error}",
            request_id=get_request_id(),
        ).with_context(command=command)
        if key is not None:
            failure.with_context(key=key)
        if command in _COUNTER_COMMANDS and isinstance(error, ResponseError):
            failure.with_suggestion("Counters need integer values; store them as int or numeric text")

        logger.error(f"Redis {command} failed", stage=f"REDIS.{command}", error=str(error), **failure.to_dict())
        return failure

    def exists(self, key: str) -> int:
        try:
            return self._redis.exists(key)
        except RedisError as e:
            raise self._fail("EXISTS", key, e) from e

    def get(self, key: str) -> str | None:
        try:
            return self._redis.get(key)
        except RedisError as e:
            raise self._fail("GET", key, e) from e

    def set(self, key: str, value: str) -> Any:
        try:
            return self._redis.set(key, value)
        except RedisError as e:
            raise self._fail("SET", key, e) from e

    def setex(self, key: str, ttl: int, value: str) -> Any:
        try:
            return self._redis.setex(key, ttl, value)
        except RedisError as e:
            raise self._fail("SETEX", key, e) from e

    def delete(self, key: str) -> int:
        try:
            return self._redis.delete(key)
        except RedisError as e:
            raise self._fail("DEL", key, e) from e

    def incrby(self, key: str, amount: int) -> int:
        try:
            return self._redis.incrby(key, amount)
        except RedisError as e:
            raise self._fail("INCRBY", key, e) from e

    def decrby(self, key: str, amount: int) -> int:
        try:
            return self._redis.decrby(key, amount)
        except RedisError as e:
            raise self._fail("DECRBY", key, e) from e

    def flushdb(self) -> Any:
        try:
            return self._redis.flushdb()
        except RedisError as e:
            raise self._fail("FLUSHDB", None, e) from e


# =============================================================================
# LAYER 5: HEALTH MONITORING
# =============================================================================


class HealthMonitor:
    """Measures ping latency of an established connection."""

    def __init__(self, connection_manager: ConnectionManager, settings):
        self._conn_mgr = connection_manager
        self._settings = settings

    def health_check(self) -> dict[str, Any]:
        """
        Perform health check on the Redis connection.

        Returns:
            Dict with health status and ping latency
        """
        health = {
            "status": "healthy",
            "connected": self._conn_mgr.is_connected(),
            "host": self._settings.redis.REDIS_HOST,
            "port": self._settings.redis.REDIS_PORT,
            "ping_latency_ms": None,
        }

        client = self._conn_mgr.get_client()
        if not client:
            health["status"] = "unhealthy"
            health["error"] = "Client not initialized"
            return health

        try:
            start = time.perf_counter()
            client.ping()
            health["ping_latency_ms"] = round((time.perf_counter() - start) * 1000, 2)
        except RedisError as e:
            health["status"] = "unhealthy"
            health["error"] = str(e)

        return health


# =============================================================================
# LAYER 6: PUBLIC API
# =============================================================================


class RedisStore:
    """
    Redis implementation of the KeyValueStore protocol.

    Usage:
        store = RedisStore(settings)
        store.connect()

        ack = store.set("wp_:posts:1", {"title": "Hello"})
        value = store.get("wp_:posts:1")

        store.close()

    Mutating calls return raw Redis replies; ``normalize_response`` is the
    caller's job.
    """

    def __init__(self, settings, codec: ValueCodec | None = None):
        """
        Initialize Redis store.

        Args:
            settings: Application settings
            codec: Value codec (default: ValueCodec)
        """
        self._settings = settings
        self._codec = codec or ValueCodec()
        self._conn_mgr = ConnectionManager(settings)
        self._executor: OperationExecutor | None = None
        self._health_monitor = HealthMonitor(self._conn_mgr, settings)

    @classmethod
    def from_client(cls, client: redis.Redis, settings, codec: ValueCodec | None = None) -> "RedisStore":
        """Wrap an already-connected client (tests, shared pools)."""
        store = cls(settings, codec=codec)
        store._executor = OperationExecutor(store._conn_mgr.adopt(client))
        return store

    def connect(self) -> None:
        """
        Connect and verify the server.

        Raises:
            CacheConnectionError: If connection fails
        """
        client = self._conn_mgr.connect()
        self._executor = OperationExecutor(client)

    def close(self) -> None:
        self._conn_mgr.disconnect()
        self._executor = None

    def ping(self) -> bool:
        client = self._conn_mgr.get_client()
        if client is None:
            return False
        try:
            return bool(client.ping())
        except RedisError:
            return False

    def health_check(self) -> dict[str, Any]:
        return self._health_monitor.health_check()

    # -------------------------------------------------------------------------
    # KeyValueStore operations
    # -------------------------------------------------------------------------

    def exists(self, key: str) -> int:
        return self._executor.exists(key)

    def get(self, key: str) -> Any:
        return self._codec.decode(self._executor.get(key))

    def set(self, key: str, value: Any) -> Any:
        return self._executor.set(key, self._codec.encode(value))

    def setex(self, key: str, ttl: int, value: Any) -> Any:
        return self._executor.setex(key, ttl, self._codec.encode(value))

    def delete(self, key: str) -> Any:
        return self._executor.delete(key)

    def incrby(self, key: str, amount: int) -> Any:
        return self._executor.incrby(key, amount)

    def decrby(self, key: str, amount: int) -> Any:
        return self._executor.decrby(key, amount)

    def flushdb(self) -> Any:
        return self._executor.flushdb()
