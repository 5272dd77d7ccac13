"""Runtime configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
import os


@dataclass(frozen=True)
class AppSettings:
    """Environment-backed settings for the web app, worker and scripts."""

    database_url: str
    s3_endpoint: str
    s3_region: str
    s3_bucket: str
    s3_access_key_id: str
    s3_secret_access_key: str
    image_encryption_key: str
    delete_old_documents: bool
    document_max_age_days: int
    retention_interval_seconds: int
    max_image_bytes: int
    log_level: str


DEFAULT_DATABASE_URL = "postgresql+psycopg://collab:collab@pg:5432/collab_docs"


def _env_str(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise RuntimeError(f"Invalid integer for {name}: {value}") from exc


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in ("1", "true", "yes", "on"):
        return True
    if normalized in ("0", "false", "no", "off", ""):
        return False
    raise RuntimeError(f"Invalid boolean for {name}: {value}")


def load_settings() -> AppSettings:
    """Load all app settings from the environment."""
    return AppSettings(
        database_url=_env_str("DATABASE_URL", DEFAULT_DATABASE_URL),
        s3_endpoint=_env_str("S3_ENDPOINT"),
        s3_region=_env_str("S3_REGION", "us-east-1"),
        s3_bucket=_env_str("S3_BUCKET", "collab-docs-images"),
        s3_access_key_id=_env_str("S3_ACCESS_KEY_ID"),
        s3_secret_access_key=_env_str("S3_SECRET_ACCESS_KEY"),
        image_encryption_key=_env_str("IMAGE_ENCRYPTION_KEY"),
        delete_old_documents=_env_bool("DELETE_OLD_DOCUMENTS", False),
        document_max_age_days=_env_int("DOCUMENT_MAX_AGE_DAYS", 730),
        retention_interval_seconds=_env_int("RETENTION_INTERVAL_SECONDS", 86400),
        max_image_bytes=_env_int("MAX_IMAGE_BYTES", 10 * 1024 * 1024),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
    )
