from .service_request_store import ServiceRequestStore
from .object_storage import ObjectStorage, StoredObject, UploadTarget

__all__ = [
    "ServiceRequestStore",
    "ObjectStorage",
    "StoredObject",
    "UploadTarget",
]
