"""Application service for the attachment upload flow."""

import logging

from app.application.interfaces import ObjectStorage, StoredObject, UploadTarget

logger = logging.getLogger(__name__)


class ObjectService:
    """Issues upload targets and resolves object references. Stateless."""

    def __init__(self, storage: ObjectStorage):
        self._storage = storage

    def issue_upload_target(self) -> UploadTarget:
        target = self._storage.issue_upload_target()
        logger.info("Issued upload target for %s", target.object_path)
        return target

    def normalize(self, raw: str) -> str:
        return self._storage.normalize_object_path(raw)

    async def open_object(self, object_path: str) -> StoredObject:
        return await self._storage.open_object(object_path)

    async def receive_upload(
        self, object_id: str, content: bytes, content_type: str | None = None
    ) -> str:
        return await self._storage.store_upload(object_id, content, content_type)
