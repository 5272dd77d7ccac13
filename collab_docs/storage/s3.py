"""S3 bucket with customer-provided server-side encryption (SSE-C)."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from typing import Any, Final
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from collab_docs.config import AppSettings

from .base import image_object_key
from .exceptions import ObjectNotFoundError, StorageConfigError, StorageError


LOGGER = logging.getLogger(__name__)
SSE_ALGORITHM: Final[str] = "AES256"
ENCRYPTION_KEY_BYTES: Final[int] = 32
MISSING_OBJECT_CODES: Final[frozenset[str]] = frozenset({"NoSuchKey", "404", "NotFound"})


def decode_encryption_key(value: str) -> bytes:
    """Decode the base64 SSE-C key and check it is exactly 256 bits."""
    if not value:
        raise StorageConfigError("IMAGE_ENCRYPTION_KEY is not set")
    try:
        key = base64.b64decode(value, validate=True)
    except binascii.Error as exc:
        raise StorageConfigError("IMAGE_ENCRYPTION_KEY must be base64 encoded") from exc
    if len(key) != ENCRYPTION_KEY_BYTES:
        raise StorageConfigError(
            f"IMAGE_ENCRYPTION_KEY must decode to {ENCRYPTION_KEY_BYTES} bytes, got {len(key)}"
        )
    return key


@dataclass(frozen=True)
class S3ImageBucket:
    """Stores image bytes encrypted at rest; S3 decrypts them on read."""

    client: Any
    bucket: str
    encryption_key: bytes = field(repr=False)

    def _encryption_params(self) -> dict[str, Any]:
        # boto3 base64-encodes the key and adds the MD5 header itself.
        return {"SSECustomerAlgorithm": SSE_ALGORITHM, "SSECustomerKey": self.encryption_key}

    def put_image(self, image_id: str, data: bytes, content_type: str | None = None) -> None:
        key = image_object_key(image_id)
        extra: dict[str, Any] = {}
        if content_type:
            extra["ContentType"] = content_type
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                **extra,
                **self._encryption_params(),
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Failed to store {key}: {exc}") from exc
        LOGGER.debug("Stored %s (%s bytes)", key, len(data))

    def get_image(self, image_id: str) -> bytes:
        key = image_object_key(image_id)
        try:
            response = self.client.get_object(
                Bucket=self.bucket,
                Key=key,
                **self._encryption_params(),
            )
            return response["Body"].read()
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in MISSING_OBJECT_CODES:
                raise ObjectNotFoundError(f"Object not found: {key}") from exc
            raise StorageError(f"Failed to read {key}: {exc}") from exc
        except BotoCoreError as exc:
            raise StorageError(f"Failed to read {key}: {exc}") from exc

    def delete_image(self, image_id: str) -> None:
        key = image_object_key(image_id)
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Failed to delete {key}: {exc}") from exc
        LOGGER.debug("Deleted %s", key)


def bucket_from_settings(settings: AppSettings) -> S3ImageBucket:
    """Build the S3 bucket described by the environment settings."""
    if not settings.s3_bucket:
        raise StorageConfigError("S3_BUCKET is not set")
    client = boto3.client(
        "s3",
        endpoint_url=settings.s3_endpoint or None,
        region_name=settings.s3_region or None,
        aws_access_key_id=settings.s3_access_key_id or None,
        aws_secret_access_key=settings.s3_secret_access_key or None,
    )
    return S3ImageBucket(
        client=client,
        bucket=settings.s3_bucket,
        encryption_key=decode_encryption_key(settings.image_encryption_key),
    )
