"""Object storage capability for image bytes."""

from __future__ import annotations

from typing import Protocol


def image_object_key(image_id: str) -> str:
    """Bucket key holding the bytes of one image."""
    return f"images/{image_id}"


class ImageBucket(Protocol):
    def put_image(self, image_id: str, data: bytes, content_type: str | None = None) -> None:
        ...

    def get_image(self, image_id: str) -> bytes:
        ...

    def delete_image(self, image_id: str) -> None:
        ...
