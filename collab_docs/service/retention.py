"""Document retention rules."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import logging

from collab_docs.db.models import Document
from collab_docs.storage import ImageBucket, StorageError
from collab_docs.store import LessThan, RecordNotFoundError, Store

from .documents import purge_document


LOGGER = logging.getLogger(__name__)


def retention_cutoff(max_age_days: int, now: datetime | None = None) -> datetime:
    """Oldest last-access time a document may have and still be kept."""
    return (now or datetime.now(timezone.utc)) - timedelta(days=max_age_days)


def find_old_documents(store: Store, cutoff: datetime) -> list[Document]:
    return store.find_many(Document, LessThan("last_accessed_at", cutoff), order_by="last_accessed_at")


def delete_old_documents(store: Store, bucket: ImageBucket, cutoff: datetime) -> int:
    """Delete documents last accessed before ``cutoff`` along with their images.

    Every document is purged in its own store transaction. A document whose
    objects cannot be deleted keeps all of its rows and is retried on the next
    run; the remaining documents are still swept.
    """
    deleted = 0
    failed = 0
    for document_id in [document.id for document in find_old_documents(store, cutoff)]:
        try:
            with store.transaction():
                purge_document(store, bucket, document_id)
        except RecordNotFoundError:
            LOGGER.info("Document id=%s already gone, skipping", document_id)
            continue
        except StorageError:
            LOGGER.exception("Could not delete objects of document id=%s, keeping it for the next run", document_id)
            failed += 1
            continue
        deleted += 1
    if failed:
        LOGGER.warning("Retention sweep left %s documents in place after storage failures", failed)
    return deleted
