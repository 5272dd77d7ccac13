"""FastAPI app serving documents and their embedded images."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Final
import logging

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from collab_docs.config import load_settings
from collab_docs.db.models import Document
from collab_docs.db.session import get_session
from collab_docs.service import (
    create_document,
    create_image,
    delete_document,
    delete_image,
    fetch_document,
    get_documents_by_owner,
    get_image,
    is_valid_modification_secret,
    update_document,
    update_last_accessed_at,
)
from collab_docs.storage import ImageBucket, ObjectNotFoundError, StorageError, bucket_from_settings
from collab_docs.store import RecordNotFoundError, SqlStore, Store


LOGGER = logging.getLogger(__name__)
ALLOWED_IMAGE_TYPES: Final[frozenset[str]] = frozenset(
    {"image/png", "image/jpeg", "image/gif", "image/webp"}
)
settings = load_settings()
app = FastAPI(title="Collaborative Documents Service")


def get_db() -> Session:
    """FastAPI dependency for DB session."""
    with get_session() as session:
        yield session


def get_store(db: Session = Depends(get_db)) -> Store:
    return SqlStore(db)


@lru_cache(maxsize=1)
def get_bucket() -> ImageBucket:
    return bucket_from_settings(settings)


@app.exception_handler(RecordNotFoundError)
def record_not_found_handler(request: Request, exc: RecordNotFoundError) -> JSONResponse:
    return JSONResponse({"detail": str(exc)}, status_code=404)


@app.exception_handler(StorageError)
def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    LOGGER.error("Object storage failure on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse({"detail": "Object storage unavailable"}, status_code=502)


def _document_payload(document: Document, include_secret: bool = False) -> dict[str, Any]:
    """JSON view of a document; the secret is only revealed to its creator."""
    payload: dict[str, Any] = {
        "id": document.id,
        "owner_external_id": document.owner_external_id,
        "created_at": document.created_at.isoformat(),
        "updated_at": document.updated_at.isoformat(),
        "last_accessed_at": document.last_accessed_at.isoformat(),
    }
    if include_secret:
        payload["modification_secret"] = document.modification_secret
    return payload


def _forbidden() -> HTTPException:
    return HTTPException(status_code=403, detail="Invalid modification secret")


@app.post("/documents")
def create_document_api(
    owner_external_id: str | None = Query(default=None),
    store: Store = Depends(get_store),
) -> JSONResponse:
    document = create_document(store, owner_external_id)
    return JSONResponse(_document_payload(document, include_secret=True))


@app.get("/documents")
def own_documents_api(
    owner_external_id: str | None = Query(default=None),
    store: Store = Depends(get_store),
) -> JSONResponse:
    documents = get_documents_by_owner(store, owner_external_id)
    return JSONResponse([_document_payload(document) for document in documents])


@app.get("/documents/{document_id}")
def document_api(document_id: str, store: Store = Depends(get_store)) -> JSONResponse:
    document = fetch_document(store, document_id)
    if document is None:
        raise HTTPException(status_code=404, detail="Document not found")
    update_last_accessed_at(store, document.id)
    return JSONResponse(_document_payload(document))


@app.get("/documents/{document_id}/data")
def document_data_api(document_id: str, store: Store = Depends(get_store)) -> Response:
    """Serve the stored editor state; an unsaved document has an empty body."""
    document = fetch_document(store, document_id)
    if document is None:
        raise HTTPException(status_code=404, detail="Document not found")
    update_last_accessed_at(store, document.id)
    return Response(content=document.data or b"", media_type="application/octet-stream")


@app.put("/documents/{document_id}/data", status_code=204)
async def update_document_data_api(
    document_id: str,
    request: Request,
    modification_secret: str | None = Query(default=None),
    store: Store = Depends(get_store),
) -> Response:
    if not await run_in_threadpool(is_valid_modification_secret, store, document_id, modification_secret):
        raise _forbidden()
    data = await request.body()
    if await run_in_threadpool(update_document, store, document_id, data) is None:
        raise HTTPException(status_code=404, detail="Document not found")
    return Response(status_code=204)


@app.delete("/documents/{document_id}")
def delete_document_api(
    document_id: str,
    modification_secret: str | None = Query(default=None),
    store: Store = Depends(get_store),
    bucket: ImageBucket = Depends(get_bucket),
) -> JSONResponse:
    if not delete_document(store, bucket, document_id, modification_secret):
        raise HTTPException(status_code=404, detail="Document not found")
    return JSONResponse({"deleted": True})


@app.post("/documents/{document_id}/images")
async def upload_image_api(
    document_id: str,
    request: Request,
    modification_secret: str | None = Query(default=None),
    store: Store = Depends(get_store),
    bucket: ImageBucket = Depends(get_bucket),
) -> JSONResponse:
    # The multipart body is only read once the secret has been accepted.
    if not await run_in_threadpool(is_valid_modification_secret, store, document_id, modification_secret):
        raise _forbidden()

    form = await request.form()
    try:
        upload = form.get("file")
        if not isinstance(upload, UploadFile):
            raise HTTPException(status_code=400, detail="Missing file part")
        mimetype = (upload.content_type or "").split(";")[0].strip().lower()
        if mimetype not in ALLOWED_IMAGE_TYPES:
            raise HTTPException(status_code=415, detail=f"Unsupported image type: {mimetype or 'unknown'}")
        data = await upload.read(settings.max_image_bytes + 1)
        if len(data) > settings.max_image_bytes:
            raise HTTPException(status_code=413, detail="Image too large")
    finally:
        await form.close()

    image = await run_in_threadpool(create_image, store, document_id, mimetype, upload.filename)
    try:
        await run_in_threadpool(bucket.put_image, image.id, data, mimetype)
    except StorageError:
        await run_in_threadpool(delete_image, store, image.id)
        raise
    LOGGER.info("Stored image id=%s for document id=%s", image.id, document_id)
    return JSONResponse({"path": f"/images/{image.id}"})


@app.get("/images/{image_id}")
def image_api(
    image_id: str,
    store: Store = Depends(get_store),
    bucket: ImageBucket = Depends(get_bucket),
) -> Response:
    image = get_image(store, image_id)
    if image is None:
        raise HTTPException(status_code=404, detail="Image not found")
    try:
        content = bucket.get_image(image.id)
    except ObjectNotFoundError:
        LOGGER.warning("Image id=%s has no stored object", image.id)
        raise HTTPException(status_code=404, detail="Image not found")
    return Response(
        content=content,
        media_type=image.mimetype,
        headers={"Content-Disposition": f"inline; filename={image.name}"},
    )


@app.delete("/images/{image_id}", status_code=204)
def delete_image_api(
    image_id: str,
    modification_secret: str | None = Query(default=None),
    store: Store = Depends(get_store),
    bucket: ImageBucket = Depends(get_bucket),
) -> Response:
    image = get_image(store, image_id)
    if image is None or not is_valid_modification_secret(store, image.document_id, modification_secret):
        raise _forbidden()
    bucket.delete_image(image.id)
    delete_image(store, image.id)
    return Response(status_code=204)


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}
