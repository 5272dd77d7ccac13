"""Custom exceptions for image object storage."""


class StorageError(RuntimeError):
    """Base exception for object storage failures."""


class ObjectNotFoundError(StorageError):
    """Raised when the requested object does not exist in the bucket."""


class StorageConfigError(StorageError):
    """Raised when the bucket cannot be built from the configured settings."""
