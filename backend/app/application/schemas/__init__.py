from .service_request import (
    AttachmentResultResponse,
    AttachmentsAppend,
    AttachmentUrlRequest,
    MetricsResponse,
    ServiceRequestCreate,
    ServiceRequestResponse,
    ServiceRequestUpdate,
)
from .comment import CommentCreate, CommentResponse
from .objects import (
    NormalizePathRequest,
    NormalizePathResponse,
    StoredObjectResponse,
    UploadUrlResponse,
)

__all__ = [
    "AttachmentResultResponse",
    "AttachmentsAppend",
    "AttachmentUrlRequest",
    "MetricsResponse",
    "ServiceRequestCreate",
    "ServiceRequestResponse",
    "ServiceRequestUpdate",
    "CommentCreate",
    "CommentResponse",
    "NormalizePathRequest",
    "NormalizePathResponse",
    "StoredObjectResponse",
    "UploadUrlResponse",
]
