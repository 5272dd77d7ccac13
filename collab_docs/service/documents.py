"""Document lifecycle and modification-secret checks."""

from __future__ import annotations

from datetime import datetime, timezone
import logging

from collab_docs.db.models import Document
from collab_docs.storage import ImageBucket
from collab_docs.store import And, Equals, RecordNotFoundError, Store

from .ids import is_valid_id, new_id
from .images import delete_image, get_images_for_document


LOGGER = logging.getLogger(__name__)


def create_document(store: Store, owner_external_id: str | None = None) -> Document:
    """Create a document with a fresh id and modification secret."""
    now = datetime.now(timezone.utc)
    document = Document(
        id=new_id(),
        modification_secret=new_id(),
        owner_external_id=owner_external_id,
        data=None,
        created_at=now,
        updated_at=now,
        last_accessed_at=now,
    )
    return store.insert(document)


def fetch_document(store: Store, document_id: str | None) -> Document | None:
    """Look a document up without touching last_accessed_at."""
    if not is_valid_id(document_id):
        return None
    return store.find_one(Document, Equals("id", document_id))


def is_valid_modification_secret(store: Store, document_id: str | None, secret: str | None) -> bool:
    if not is_valid_id(document_id) or not secret:
        return False
    match = store.find_one(
        Document,
        And(Equals("id", document_id), Equals("modification_secret", secret)),
    )
    return match is not None


def update_document(store: Store, document_id: str | None, data: bytes | None) -> Document | None:
    """Overwrite the document content. The caller must have checked the secret."""
    if not is_valid_id(document_id):
        return None
    try:
        return store.update(
            Document,
            document_id,
            data=data,
            updated_at=datetime.now(timezone.utc),
        )
    except RecordNotFoundError:
        return None


def update_last_accessed_at(store: Store, document_id: str | None) -> Document | None:
    if not is_valid_id(document_id):
        return None
    try:
        return store.update(Document, document_id, last_accessed_at=datetime.now(timezone.utc))
    except RecordNotFoundError:
        return None


def get_documents_by_owner(store: Store, owner_external_id: str | None) -> list[Document]:
    """Documents of one owner, oldest first. Anonymous listing is not allowed."""
    if owner_external_id is None:
        return []
    return store.find_many(
        Document,
        Equals("owner_external_id", owner_external_id),
        order_by="created_at",
    )


def purge_document(store: Store, bucket: ImageBucket, document_id: str) -> Document:
    """Delete a document with its images, without any secret check.

    Each image object is removed before its row, and the document row goes
    last. If storage fails midway the remaining rows stay in place, so the
    purge can simply be repeated.
    """
    for image in get_images_for_document(store, document_id):
        bucket.delete_image(image.id)
        delete_image(store, image.id)
    document = store.delete(Document, document_id)
    LOGGER.info("Deleted document id=%s", document_id)
    return document


def delete_document(
    store: Store,
    bucket: ImageBucket,
    document_id: str | None,
    secret: str | None,
) -> bool:
    if not is_valid_modification_secret(store, document_id, secret):
        return False
    purge_document(store, bucket, document_id)
    return True
