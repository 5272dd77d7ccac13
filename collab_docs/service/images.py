"""Image metadata records.

Only rows are handled here. Writing, reading and deleting the bytes in object
storage is done by whoever orchestrates the operation, so a storage failure is
never hidden behind a metadata change.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Final
import logging

from collab_docs.db.models import Document, Image
from collab_docs.store import Equals, RecordNotFoundError, Store

from .ids import is_valid_id, new_id


LOGGER = logging.getLogger(__name__)
ANONYMIZED_IMAGE_NAME: Final[str] = "image"


def anonymized_image_name(original_name: str | None) -> str:
    """Replace the uploaded filename with a fixed name, keeping the extension."""
    # Client filenames may use Windows separators.
    basename = (original_name or "").replace("\\", "/")
    suffix = PurePosixPath(basename).suffix
    return f"{ANONYMIZED_IMAGE_NAME}{suffix}"


def create_image(store: Store, document_id: str, mimetype: str, original_name: str | None) -> Image:
    """Persist a new image row for an existing document."""
    if not is_valid_id(document_id) or store.find_one(Document, Equals("id", document_id)) is None:
        raise RecordNotFoundError(Document.__name__, str(document_id))
    now = datetime.now(timezone.utc)
    image = Image(
        id=new_id(),
        name=anonymized_image_name(original_name),
        mimetype=mimetype,
        document_id=document_id,
        created_at=now,
        updated_at=now,
    )
    return store.insert(image)


def get_image(store: Store, image_id: str | None) -> Image | None:
    if not is_valid_id(image_id):
        return None
    return store.find_one(Image, Equals("id", image_id))


def get_images_for_document(store: Store, document_id: str) -> list[Image]:
    return store.find_many(Image, Equals("document_id", document_id), order_by="created_at")


def delete_image(store: Store, image_id: str) -> Image:
    """Delete the image row; raises RecordNotFoundError when it is missing."""
    image = store.delete(Image, image_id)
    LOGGER.info("Deleted image id=%s document_id=%s", image.id, image.document_id)
    return image
