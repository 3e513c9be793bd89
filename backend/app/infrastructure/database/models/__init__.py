from .service_request import ServiceRequestModel
from .comment import CommentModel

__all__ = [
    "ServiceRequestModel",
    "CommentModel",
]
