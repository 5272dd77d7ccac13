from __future__ import annotations

from dataclasses import replace
import unittest
from unittest.mock import MagicMock, patch

from collab_docs.config import load_settings
from collab_docs.db.models import Document
from collab_docs.service import create_document
from collab_docs.storage import MemoryImageBucket
from collab_docs.store import MemoryStore
from collab_docs.worker import main as worker


class SweepTests(unittest.TestCase):
    @patch("collab_docs.worker.main.SqlStore")
    @patch("collab_docs.worker.main.get_session")
    def test_sweep_deletes_documents_past_max_age(self, mock_get_session, mock_sql_store) -> None:
        store = MemoryStore()
        mock_sql_store.return_value = store
        old = create_document(store)
        kept = create_document(store)
        store.update(Document, old.id, last_accessed_at=old.last_accessed_at.replace(year=2020))
        settings = replace(load_settings(), document_max_age_days=730)

        deleted = worker.sweep(settings, MemoryImageBucket())

        self.assertEqual(deleted, 1)
        self.assertEqual([doc.id for doc in store.find_many(Document)], [kept.id])
        mock_get_session.assert_called_once_with()


class RunTests(unittest.TestCase):
    @patch("collab_docs.worker.main.bucket_from_settings")
    @patch("collab_docs.worker.main.load_settings")
    def test_disabled_flag_exits_without_sweeping(self, mock_load_settings, mock_bucket) -> None:
        mock_load_settings.return_value = replace(load_settings(), delete_old_documents=False)

        worker.run()

        mock_bucket.assert_not_called()

    @patch("collab_docs.worker.main.time.sleep")
    @patch("collab_docs.worker.main.sweep")
    @patch("collab_docs.worker.main.bucket_from_settings")
    @patch("collab_docs.worker.main.load_settings")
    def test_failed_sweep_does_not_stop_the_loop(
        self,
        mock_load_settings,
        mock_bucket,
        mock_sweep,
        mock_sleep,
    ) -> None:
        mock_load_settings.return_value = replace(
            load_settings(),
            delete_old_documents=True,
            retention_interval_seconds=60,
        )
        mock_bucket.return_value = MagicMock()
        mock_sweep.side_effect = [RuntimeError("db down"), 3]
        mock_sleep.side_effect = [None, KeyboardInterrupt()]

        with self.assertLogs("collab_docs.worker", level="ERROR"), self.assertRaises(KeyboardInterrupt):
            worker.run()

        self.assertEqual(mock_sweep.call_count, 2)


if __name__ == "__main__":
    unittest.main()
