from .service_request import ServiceRequest, ServiceRequestStatus
from .comment import Comment
from .metrics import ServiceMetrics

__all__ = [
    "ServiceRequest",
    "ServiceRequestStatus",
    "Comment",
    "ServiceMetrics",
]
