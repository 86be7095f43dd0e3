class StorageError(Exception):
    """Base class for storage failures."""


class URLExistsError(StorageError):
    """Raised when saving an alias that is already taken."""


class URLNotFoundError(StorageError):
    """Raised when no mapping exists for an alias."""
