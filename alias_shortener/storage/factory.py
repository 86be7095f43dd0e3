"""
Factory for creating URL storage instances.
"""

from enum import Enum
from typing import Optional

from alias_shortener.config import Settings
from alias_shortener.logging_config import ContextLogger
from .strategies import URLStorage, SQLStorage, InMemoryStorage


class StorageBackend(Enum):
    """Available storage backends"""
    SQL = "sql"
    MEMORY = "memory"


class StorageFactory:
    """
    Simple factory for creating storage instances.

    Unlike a process-wide singleton, every call builds a fresh instance;
    the application keeps the one it uses in app.state.
    """

    @classmethod
    def create(cls, settings: Settings, logger: Optional[ContextLogger] = None) -> URLStorage:
        """
        Create the storage configured in settings.

        Raises:
            ValueError: If the backend name is unknown
            StorageError: If the backend cannot be opened
        """
        backend = StorageBackend(settings.storage_backend)

        if backend == StorageBackend.SQL:
            return SQLStorage.from_path(settings.storage_path, logger=logger)

        if backend == StorageBackend.MEMORY:
            if logger:
                logger.debug("storage opened", fields={"backend": "memory"})
            return InMemoryStorage()

        raise ValueError(f"Unknown storage backend: {backend}")
