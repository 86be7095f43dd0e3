"""
URL storage module.

Implements the Strategy Pattern for pluggable persistence of
alias -> URL mappings.
"""

from .errors import StorageError, URLExistsError, URLNotFoundError
from .strategies import (
    URLSaver,
    URLGetter,
    URLDeleter,
    URLStorage,
    SQLStorage,
    InMemoryStorage,
)
from .factory import StorageFactory, StorageBackend

__all__ = [
    "StorageError",
    "URLExistsError",
    "URLNotFoundError",
    "URLSaver",
    "URLGetter",
    "URLDeleter",
    "URLStorage",
    "SQLStorage",
    "InMemoryStorage",
    "StorageFactory",
    "StorageBackend",
]
