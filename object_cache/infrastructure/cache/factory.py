"""
Remote Store Factory

Selects the KeyValueStore implementation named by CACHE_BACKEND and probes it
once. The probe never raises: an unreachable backend yields a degraded
RemoteConnection that records why.
"""

from object_cache.core.config.constants import CacheBackend, Stage
from object_cache.core.exceptions import CacheConnectionError, ConfigurationError
from object_cache.core.interfaces.cache import KeyValueStore, RemoteConnection
from object_cache.core.logging.logger import get_logger, log_stage
from object_cache.infrastructure.cache.redis_client import RedisStore

logger = get_logger(__name__)


class RemoteStoreFactory:
    """
    Factory for creating remote store instances.

    Supports:
    - Redis (RedisStore)
    - none (no remote store, local-only facade)
    """

    def __init__(self):
        """Initialize the remote store factory."""
        self._store_types = {
            CacheBackend.REDIS.value: RedisStore,
        }

    def get(self, backend: str, settings) -> KeyValueStore | None:
        """
        Get an unconnected store instance.

        Args:
            backend: Backend name ("redis" or "none")
            settings: Application settings

        Returns:
            KeyValueStore, or None for the "none" backend

        Raises:
            ConfigurationError: If backend is not supported
        """
        backend_lower = backend.lower()

        if backend_lower == CacheBackend.NONE.value:
            return None

        if backend_lower not in self._store_types:
            raise ConfigurationError(
                f"Unknown cache backend: {backend}. "
                f"Available backends: {', '.join(self.get_available())}",
                details={"backend": backend},
            )

        return self._store_types[backend_lower](settings)

    def get_available(self) -> list[str]:
        """List supported backend names."""
        return [*self._store_types.keys(), CacheBackend.NONE.value]


def connect_remote_store(settings, factory: RemoteStoreFactory | None = None) -> RemoteConnection:
    """
    Resolve and probe the configured remote store.

    STAGE-0.1: Remote probe

    Args:
        settings: Application settings
        factory: Store factory (default: RemoteStoreFactory)

    Returns:
        RemoteConnection: connected store, or degraded result with a reason
    """
    factory = factory or RemoteStoreFactory()
    backend = settings.cache.CACHE_BACKEND

    store = factory.get(backend, settings)
    if store is None:
        log_stage(logger, Stage.REMOTE_PROBE, "Remote store disabled by configuration", backend=backend)
        return RemoteConnection.degraded(f"remote store disabled (CACHE_BACKEND={backend})")

    try:
        store.connect()
    except CacheConnectionError as e:
        log_stage(
            logger,
            Stage.REMOTE_PROBE,
            "Remote store unreachable, running local-only",
            level="warning",
            error=e.message,
            **e.details,
        )
        return RemoteConnection.degraded(e.message)

    return RemoteConnection.connected(store)
