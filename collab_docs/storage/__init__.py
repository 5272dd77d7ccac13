"""Object storage for image bytes."""

from .base import ImageBucket, image_object_key
from .exceptions import ObjectNotFoundError, StorageConfigError, StorageError
from .memory import MemoryImageBucket
from .s3 import S3ImageBucket, bucket_from_settings, decode_encryption_key

__all__ = [
    "ImageBucket",
    "MemoryImageBucket",
    "ObjectNotFoundError",
    "S3ImageBucket",
    "StorageConfigError",
    "StorageError",
    "bucket_from_settings",
    "decode_encryption_key",
    "image_object_key",
]
