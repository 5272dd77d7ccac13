"""Service-layer business logic."""

from .documents import (
    create_document,
    delete_document,
    fetch_document,
    get_documents_by_owner,
    is_valid_modification_secret,
    purge_document,
    update_document,
    update_last_accessed_at,
)
from .ids import is_valid_id
from .images import (
    ANONYMIZED_IMAGE_NAME,
    anonymized_image_name,
    create_image,
    delete_image,
    get_image,
    get_images_for_document,
)
from .retention import delete_old_documents, find_old_documents, retention_cutoff

__all__ = [
    "ANONYMIZED_IMAGE_NAME",
    "anonymized_image_name",
    "create_document",
    "create_image",
    "delete_document",
    "delete_image",
    "delete_old_documents",
    "fetch_document",
    "find_old_documents",
    "get_documents_by_owner",
    "get_image",
    "get_images_for_document",
    "is_valid_id",
    "is_valid_modification_secret",
    "purge_document",
    "retention_cutoff",
    "update_document",
    "update_last_accessed_at",
]
