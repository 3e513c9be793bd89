"""Attachment upload flow and object serving.

A client uploads a file in three steps:
    1. POST /api/objects/upload          → a single-use ``uploadURL``
    2. PUT  <uploadURL>                  → raw bytes, straight to storage
    3. POST /api/normalize-path          → the servable ``/objects/...`` path
The resulting path is then attached to a request or comment. Nothing ties
the steps together server-side; an interrupted flow leaves an unused target
or an unattached object behind.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import FileResponse

from app.application.schemas import (
    NormalizePathRequest,
    NormalizePathResponse,
    StoredObjectResponse,
    UploadUrlResponse,
)
from app.application.services import ObjectService
from app.config import Settings
from app.domain.exceptions import (
    DuplicateEntityError,
    InvalidObjectIdError,
    ObjectNotFoundError,
)
from app.infrastructure.dependencies import get_app_settings, get_object_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Objects"])

# Served outside the /api prefix so normalized paths resolve as-is
serving_router = APIRouter(tags=["Objects"])


@router.post("/objects/upload", response_model=UploadUrlResponse)
async def issue_upload_url(
    service: ObjectService = Depends(get_object_service),
) -> UploadUrlResponse:
    """Issue a single-use URL the client uploads file bytes to."""
    target = service.issue_upload_target()
    return UploadUrlResponse(upload_url=target.upload_url)


@router.put("/objects/upload/{object_id}", response_model=StoredObjectResponse)
async def receive_upload(
    object_id: str,
    request: Request,
    service: ObjectService = Depends(get_object_service),
    settings: Settings = Depends(get_app_settings),
) -> StoredObjectResponse:
    """Receiving end of a direct upload: the request body is the file."""
    limit = settings.max_upload_size_bytes
    too_large = HTTPException(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        detail=f"Upload exceeds {settings.max_upload_size_mb} MB",
    )

    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise too_large

    # Chunked bodies carry no length; stop reading once past the limit
    buffer = bytearray()
    async for chunk in request.stream():
        buffer.extend(chunk)
        if len(buffer) > limit:
            raise too_large
    content = bytes(buffer)

    try:
        object_path = await service.receive_upload(
            object_id, content, request.headers.get("content-type")
        )
    except InvalidObjectIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return StoredObjectResponse(object_path=object_path, size=len(content))


@router.post("/normalize-path", response_model=NormalizePathResponse)
async def normalize_path(
    data: NormalizePathRequest,
    service: ObjectService = Depends(get_object_service),
) -> NormalizePathResponse:
    """Turn an upload URL into the path used to reference the stored object."""
    return NormalizePathResponse(normalized_path=service.normalize(data.url))


@serving_router.get("/objects/{object_path:path}")
async def serve_object(
    object_path: str,
    service: ObjectService = Depends(get_object_service),
) -> FileResponse:
    """Stream a stored object."""
    try:
        stored = await service.open_object(f"/objects/{object_path}")
    except ObjectNotFoundError as e:
        logger.debug("Object lookup failed: %s", e)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    return FileResponse(stored.path, media_type=stored.mime_type)
