"""Local filesystem object store for attachments.

Clients upload directly to a single-use URL issued by this service; the
stored object is then referenced by a servable path.

Storage layout:
    <upload_dir>/uploads/<object-id>        object bytes; created once, never overwritten
    <upload_dir>/uploads/<object-id>.type   content type sent with the upload, if any

Reference forms:
    <public_base_url>/api/objects/upload/<object-id>   — upload URL (may carry a query string)
    /objects/uploads/<object-id>                        — normalized, servable path
"""

import logging
import uuid
from pathlib import Path
from urllib.parse import urlparse

from app.application.interfaces import ObjectStorage, StoredObject, UploadTarget
from app.domain.exceptions import (
    DuplicateEntityError,
    InvalidObjectIdError,
    ObjectNotFoundError,
)

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/api/objects/upload/"
OBJECTS_PREFIX = "/objects/"
_UPLOADS_NAMESPACE = "uploads"
_DEFAULT_MIME_TYPE = "application/octet-stream"


def _is_object_id(value: str) -> bool:
    try:
        return str(uuid.UUID(value)) == value
    except ValueError:
        return False


class LocalObjectStorage(ObjectStorage):
    """Infrastructure adapter for attachment storage on local disk."""

    def __init__(self, upload_dir: str, public_base_url: str):
        self._objects_dir = Path(upload_dir) / _UPLOADS_NAMESPACE
        self._objects_dir.mkdir(parents=True, exist_ok=True)
        self._public_base_url = public_base_url.rstrip("/")

    # ── Upload targets ──────────────────────────────────────────────

    def issue_upload_target(self) -> UploadTarget:
        object_id = str(uuid.uuid4())
        return UploadTarget(
            upload_url=f"{self._public_base_url}{UPLOAD_URL_PREFIX}{object_id}",
            object_path=f"{OBJECTS_PREFIX}{_UPLOADS_NAMESPACE}/{object_id}",
        )

    async def store_upload(
        self, object_id: str, content: bytes, content_type: str | None = None
    ) -> str:
        """Write the bytes for an issued upload target and return its servable path.

        Each target accepts exactly one upload; a second write raises
        DuplicateEntityError.
        """
        if not _is_object_id(object_id):
            raise InvalidObjectIdError(object_id)

        # The exclusive create on a fixed name is the single-use check
        dest_path = self._object_file(object_id)
        try:
            with dest_path.open("xb") as fh:
                fh.write(content)
        except FileExistsError:
            raise DuplicateEntityError("Object", "id", object_id) from None

        mime_type = (content_type or "").split(";")[0].strip()
        if mime_type:
            self._type_file(object_id).write_text(mime_type, encoding="utf-8")

        logger.info("Stored upload: %s (%d bytes, %s)", dest_path, len(content), mime_type or "untyped")
        return f"{OBJECTS_PREFIX}{_UPLOADS_NAMESPACE}/{object_id}"

    # ── References ──────────────────────────────────────────────────

    def normalize_object_path(self, raw: str) -> str:
        if raw.startswith(OBJECTS_PREFIX):
            return raw

        path = urlparse(raw).path
        if path.startswith(UPLOAD_URL_PREFIX):
            object_id = path[len(UPLOAD_URL_PREFIX):].strip("/")
            if object_id:
                return f"{OBJECTS_PREFIX}{_UPLOADS_NAMESPACE}/{object_id}"

        # Not one of ours (e.g. an external link) — leave it as given
        return raw

    async def open_object(self, object_path: str) -> StoredObject:
        namespace_prefix = f"{OBJECTS_PREFIX}{_UPLOADS_NAMESPACE}/"
        if not object_path.startswith(namespace_prefix):
            raise ObjectNotFoundError(object_path)

        object_id = object_path[len(namespace_prefix):]
        if not _is_object_id(object_id):
            raise ObjectNotFoundError(object_path)

        file_path = self._object_file(object_id)
        if not file_path.is_file():
            raise ObjectNotFoundError(object_path)

        type_path = self._type_file(object_id)
        if type_path.is_file():
            mime_type = type_path.read_text(encoding="utf-8").strip()
        else:
            mime_type = _DEFAULT_MIME_TYPE
        return StoredObject(
            path=str(file_path),
            size=file_path.stat().st_size,
            mime_type=mime_type or _DEFAULT_MIME_TYPE,
        )

    # ── Utilities ───────────────────────────────────────────────────

    def _object_file(self, object_id: str) -> Path:
        return self._objects_dir / object_id

    def _type_file(self, object_id: str) -> Path:
        return self._objects_dir / f"{object_id}.type"
