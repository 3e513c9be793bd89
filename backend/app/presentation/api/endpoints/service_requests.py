"""Service request, comment and attachment endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.application.schemas import (
    AttachmentResultResponse,
    AttachmentsAppend,
    AttachmentUrlRequest,
    CommentCreate,
    CommentResponse,
    ServiceRequestCreate,
    ServiceRequestResponse,
    ServiceRequestUpdate,
)
from app.application.services import ObjectService, ServiceRequestService
from app.domain.entities import ServiceRequest
from app.domain.exceptions import EntityNotFoundError
from app.infrastructure.dependencies import get_object_service, get_service_request_service

router = APIRouter(prefix="/service-requests", tags=["Service Requests"])


def _to_response(request: ServiceRequest) -> ServiceRequestResponse:
    return ServiceRequestResponse.model_validate(request, from_attributes=True)


# ── Listings ─────────────────────────────────────────────────────────

@router.get("", response_model=list[ServiceRequestResponse])
async def list_requests(
    service: ServiceRequestService = Depends(get_service_request_service),
) -> list[ServiceRequestResponse]:
    """All service requests, newest first."""
    return [_to_response(r) for r in await service.list_requests()]


@router.get("/active", response_model=list[ServiceRequestResponse])
async def list_active_requests(
    service: ServiceRequestService = Depends(get_service_request_service),
) -> list[ServiceRequestResponse]:
    """Requests that are not yet completed, newest first."""
    return [_to_response(r) for r in await service.list_active()]


@router.get("/completed", response_model=list[ServiceRequestResponse])
async def list_completed_requests(
    service: ServiceRequestService = Depends(get_service_request_service),
) -> list[ServiceRequestResponse]:
    """Completed requests, newest first."""
    return [_to_response(r) for r in await service.list_completed()]


@router.get("/search", response_model=list[ServiceRequestResponse])
async def search_requests(
    q: str | None = Query(None, description="Matches contact, serial, customer or product"),
    service: ServiceRequestService = Depends(get_service_request_service),
) -> list[ServiceRequestResponse]:
    """Case-insensitive substring search."""
    if not q:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Search query is required"
        )
    return [_to_response(r) for r in await service.search(q)]


# ── Single request ───────────────────────────────────────────────────

@router.get("/{request_id}", response_model=ServiceRequestResponse)
async def get_request(
    request_id: str,
    service: ServiceRequestService = Depends(get_service_request_service),
) -> ServiceRequestResponse:
    """Retrieve a single service request by ID."""
    try:
        request = await service.get_request(request_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(request)


@router.post("", response_model=ServiceRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_request(
    data: ServiceRequestCreate,
    service: ServiceRequestService = Depends(get_service_request_service),
) -> ServiceRequestResponse:
    """Open a new service request. Status defaults to ``new``."""
    request = await service.create_request(data)
    return _to_response(request)


@router.patch("/{request_id}", response_model=ServiceRequestResponse)
async def update_request(
    request_id: str,
    data: ServiceRequestUpdate,
    service: ServiceRequestService = Depends(get_service_request_service),
) -> ServiceRequestResponse:
    """Change status or details; fields not in the body are left as they are."""
    try:
        request = await service.update_request(request_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(request)


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_request(
    request_id: str,
    service: ServiceRequestService = Depends(get_service_request_service),
) -> None:
    """Delete a service request together with its comments."""
    await service.delete_request(request_id)


# ── Comments ─────────────────────────────────────────────────────────

@router.get("/{request_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    request_id: str,
    service: ServiceRequestService = Depends(get_service_request_service),
) -> list[CommentResponse]:
    """Comments on a request, oldest first."""
    comments = await service.list_comments(request_id)
    return [CommentResponse.model_validate(c, from_attributes=True) for c in comments]


@router.post(
    "/{request_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    request_id: str,
    data: CommentCreate,
    service: ServiceRequestService = Depends(get_service_request_service),
) -> CommentResponse:
    comment = await service.add_comment(request_id, data)
    return CommentResponse.model_validate(comment, from_attributes=True)


# ── Attachments ──────────────────────────────────────────────────────

@router.post("/{request_id}/attachments", response_model=ServiceRequestResponse)
async def append_attachments(
    request_id: str,
    data: AttachmentsAppend,
    service: ServiceRequestService = Depends(get_service_request_service),
) -> ServiceRequestResponse:
    """Append object references after the existing ones."""
    try:
        request = await service.append_attachments(request_id, data.attachments)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(request)


@router.put("/{request_id}/attachments", response_model=AttachmentResultResponse)
async def attach_upload(
    request_id: str,
    data: AttachmentUrlRequest,
    service: ServiceRequestService = Depends(get_service_request_service),
    objects: ObjectService = Depends(get_object_service),
) -> AttachmentResultResponse:
    """Normalize a raw upload URL and append it as a single attachment."""
    object_path = objects.normalize(data.attachment_url)
    try:
        request = await service.append_attachments(request_id, [object_path])
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return AttachmentResultResponse(object_path=object_path, request=_to_response(request))
