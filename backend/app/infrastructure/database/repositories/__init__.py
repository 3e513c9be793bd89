from .service_request_store import SQLAlchemyServiceRequestStore

__all__ = [
    "SQLAlchemyServiceRequestStore",
]
