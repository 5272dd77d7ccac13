"""In-memory image bucket used by tests and local tooling."""

from __future__ import annotations

from .base import image_object_key
from .exceptions import ObjectNotFoundError


class MemoryImageBucket:
    def __init__(self) -> None:
        self.objects: dict[str, tuple[bytes, str | None]] = {}

    def put_image(self, image_id: str, data: bytes, content_type: str | None = None) -> None:
        self.objects[image_object_key(image_id)] = (bytes(data), content_type)

    def get_image(self, image_id: str) -> bytes:
        key = image_object_key(image_id)
        if key not in self.objects:
            raise ObjectNotFoundError(f"Object not found: {key}")
        return self.objects[key][0]

    def delete_image(self, image_id: str) -> None:
        self.objects.pop(image_object_key(image_id), None)
