"""
Dependency Injection Container.

This module provides a centralized container for managing service dependencies
across the application. It holds the single RecordManager of the process, so
the record collection and the edit cursor live in one explicit instance
instead of module globals.

Example:
    from riskeval.services.container import get_container

    container = get_container()
    manager = container.record_manager
    manager.submit(form_data)
"""

from functools import lru_cache
from typing import Optional

from riskeval.core.config import Settings, settings
from riskeval.core.logging import RecordLogger
from riskeval.services.kv_backends import (
    InMemoryKeyValueBackend,
    JsonFileKeyValueBackend,
    KeyValueBackend,
)
from riskeval.services.record_manager import RecordManager
from riskeval.services.record_store import RecordStore


def build_backend(config: Settings) -> KeyValueBackend:
    """Crea el medio key-value configurado."""
    if config.storage_backend == "memory":
        return InMemoryKeyValueBackend(quota_bytes=config.storage_quota_bytes)
    return JsonFileKeyValueBackend(config.storage_path)


class DependencyContainer:
    """
    Centralized container for application dependencies.

    Attributes:
        _backend: Cached key-value medium.
        _store: Cached RecordStore.
        _manager: Cached RecordManager (one per container).
        _logger: Logger instance for record tracing.
    """

    def __init__(self, config: Optional[Settings] = None) -> None:
        """Initialize the container with lazy service references."""
        self._config = config or settings
        self._backend: Optional[KeyValueBackend] = None
        self._store: Optional[RecordStore] = None
        self._manager: Optional[RecordManager] = None
        self._logger: Optional[RecordLogger] = None

    @property
    def backend(self) -> KeyValueBackend:
        if self._backend is None:
            self._backend = build_backend(self._config)
        return self._backend

    @property
    def logger(self) -> RecordLogger:
        if self._logger is None:
            self._logger = RecordLogger("manager")
        return self._logger

    @property
    def store(self) -> RecordStore:
        if self._store is None:
            self._store = RecordStore(self.backend, prefix=self._config.storage_prefix)
        return self._store

    @property
    def record_manager(self) -> RecordManager:
        """
        Get the RecordManager instance.

        The manager is created empty; call `load()` (the API lifespan does)
        to read the persisted records.
        """
        if self._manager is None:
            self._manager = RecordManager(
                self.store,
                criterion=self._config.default_sort,
                logger=self.logger,
            )
        return self._manager

    def reset(self) -> None:
        """
        Reset all cached services.

        Useful for testing to ensure fresh instances.
        """
        self._backend = None
        self._store = None
        self._manager = None
        self._logger = None

    def override_backend(self, backend: KeyValueBackend) -> None:
        """
        Override the key-value medium (e.g., an in-memory one for tests).

        Args:
            backend: Backend implementation.
        """
        self._backend = backend
        # Reset dependents to pick up new backend
        self._store = None
        self._manager = None


@lru_cache(maxsize=1)
def get_container() -> DependencyContainer:
    """
    Get the singleton DependencyContainer instance.

    Returns:
        The global DependencyContainer instance.
    """
    return DependencyContainer()


def reset_container() -> None:
    """
    Reset the global container singleton.

    Clears the lru_cache and allows a fresh container to be created.
    """
    get_container.cache_clear()


def get_record_manager() -> RecordManager:
    """Dependencia FastAPI: el RecordManager de la sesión."""
    return get_container().record_manager
