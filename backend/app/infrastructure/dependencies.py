"""FastAPI dependency injection — wires infrastructure to application layer.

Everything here is read from ``app.state``, which ``create_app()`` fills
once at startup; there are no module-level store instances.
"""

from collections.abc import AsyncGenerator

from fastapi import Depends, Request

from app.application.interfaces import ObjectStorage, ServiceRequestStore
from app.application.services import ObjectService, ServiceRequestService
from app.config import Settings
from app.infrastructure.database.repositories import SQLAlchemyServiceRequestStore
from app.infrastructure.database.session import session_scope


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


async def get_service_request_store(
    request: Request,
) -> AsyncGenerator[ServiceRequestStore, None]:
    """Provides the store chosen at startup.

    The in-memory store is shared for the life of the process; the SQL store
    is bound to a fresh session per request (commit on success, rollback on error).
    """
    state = request.app.state
    if state.settings.storage_backend == "memory":
        yield state.memory_store
        return

    async with session_scope(state.session_factory) as session:
        yield SQLAlchemyServiceRequestStore(session)


async def get_service_request_service(
    store: ServiceRequestStore = Depends(get_service_request_store),
) -> AsyncGenerator[ServiceRequestService, None]:
    """Provides a ServiceRequestService with its store wired up."""
    yield ServiceRequestService(store)


def get_object_storage(request: Request) -> ObjectStorage:
    return request.app.state.object_storage


def get_object_service(
    storage: ObjectStorage = Depends(get_object_storage),
) -> ObjectService:
    """Provides an ObjectService over the configured attachment storage."""
    return ObjectService(storage)
