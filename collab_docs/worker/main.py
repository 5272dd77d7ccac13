"""Periodic retention worker."""

from __future__ import annotations

import logging
import time

from collab_docs.config import AppSettings, load_settings
from collab_docs.db.session import get_session
from collab_docs.service import delete_old_documents, retention_cutoff
from collab_docs.storage import ImageBucket, bucket_from_settings
from collab_docs.store import SqlStore


LOGGER = logging.getLogger("collab_docs.worker")


def sweep(settings: AppSettings, bucket: ImageBucket) -> int:
    """Run one retention pass in its own transaction."""
    cutoff = retention_cutoff(settings.document_max_age_days)
    with get_session() as session:
        deleted = delete_old_documents(SqlStore(session), bucket, cutoff)
    LOGGER.info("Retention sweep done; cutoff=%s deleted documents=%s", cutoff.isoformat(), deleted)
    return deleted


def run() -> None:
    """Sweep old documents forever at the configured interval."""
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    if not settings.delete_old_documents:
        LOGGER.info("DELETE_OLD_DOCUMENTS is disabled; nothing to do")
        return

    LOGGER.info(
        "Starting retention worker with max_age_days=%s interval=%ss",
        settings.document_max_age_days,
        settings.retention_interval_seconds,
    )
    bucket = bucket_from_settings(settings)

    while True:
        loop_started = time.monotonic()
        try:
            sweep(settings, bucket)
        except Exception as exc:
            LOGGER.exception("Retention sweep failed: %s", exc)

        elapsed = time.monotonic() - loop_started
        time.sleep(max(0.0, settings.retention_interval_seconds - elapsed))


if __name__ == "__main__":
    run()
