"""Delete documents that have not been accessed for too long, once."""

from __future__ import annotations

import argparse
from datetime import datetime
import json
from pathlib import Path
import sys
from typing import Any

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from collab_docs.config import load_settings
from collab_docs.db.session import get_session
from collab_docs.service import delete_old_documents, find_old_documents, retention_cutoff
from collab_docs.storage import StorageError, bucket_from_settings
from collab_docs.store import SqlStore


def build_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Delete documents (and their images) whose last access is older than a cutoff."
    )
    parser.add_argument(
        "--max-age-days",
        type=int,
        default=None,
        help="Retention threshold in days (default: DOCUMENT_MAX_AGE_DAYS, 730).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only report how many documents would be deleted.",
    )
    return parser


def _build_output(
    cutoff: datetime,
    dry_run: bool,
    matched: int | None,
    deleted: int | None,
    status: str,
    error: str | None,
) -> dict[str, Any]:
    return {
        "cutoff": cutoff.isoformat(),
        "dry_run": dry_run,
        "matched": matched,
        "deleted": deleted,
        "status": status,
        "error": error,
    }


def main(argv: list[str] | None = None) -> int:
    """Run one sweep and return process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings()
    max_age_days = args.max_age_days if args.max_age_days is not None else settings.document_max_age_days
    if max_age_days < 0:
        parser.error("--max-age-days must not be negative")
    cutoff = retention_cutoff(max_age_days)

    try:
        with get_session() as session:
            store = SqlStore(session)
            if args.dry_run:
                matched = len(find_old_documents(store, cutoff))
                payload = _build_output(cutoff, True, matched, 0, "ok", None)
            else:
                deleted = delete_old_documents(store, bucket_from_settings(settings), cutoff)
                payload = _build_output(cutoff, False, deleted, deleted, "ok", None)
        print(json.dumps(payload, ensure_ascii=False))
        return 0
    except StorageError as exc:
        print(json.dumps(_build_output(cutoff, args.dry_run, None, None, "error", str(exc)), ensure_ascii=False))
        return 2
    except Exception as exc:
        print(json.dumps(_build_output(cutoff, args.dry_run, None, None, "error", str(exc)), ensure_ascii=False))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
