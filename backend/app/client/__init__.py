from .errors import AttachmentUploadError, ServiceDeskAPIError
from .service_desk_client import ServiceDeskClient, UploadFile

__all__ = [
    "AttachmentUploadError",
    "ServiceDeskAPIError",
    "ServiceDeskClient",
    "UploadFile",
]
