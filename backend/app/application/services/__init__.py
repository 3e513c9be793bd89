from .service_request_service import ServiceRequestService
from .object_service import ObjectService

__all__ = [
    "ServiceRequestService",
    "ObjectService",
]
