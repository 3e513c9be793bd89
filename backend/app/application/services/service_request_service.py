"""Application service (use case) for service requests, comments and metrics."""

import logging

from app.application.interfaces import ServiceRequestStore
from app.application.schemas.comment import CommentCreate
from app.application.schemas.service_request import (
    ServiceRequestCreate,
    ServiceRequestUpdate,
)
from app.domain.entities import Comment, ServiceMetrics, ServiceRequest
from app.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


class ServiceRequestService:
    """Orchestrates service request workflow logic. Depends on the store port (DI)."""

    def __init__(self, store: ServiceRequestStore):
        self._store = store

    async def get_request(self, request_id: str) -> ServiceRequest:
        request = await self._store.get(request_id)
        if request is None:
            raise EntityNotFoundError("ServiceRequest", request_id)
        return request

    async def list_requests(self) -> list[ServiceRequest]:
        return await self._store.list_all()

    async def list_active(self) -> list[ServiceRequest]:
        return await self._store.list_active()

    async def list_completed(self) -> list[ServiceRequest]:
        return await self._store.list_completed()

    async def search(self, query: str) -> list[ServiceRequest]:
        results = await self._store.search(query)
        logger.debug("Search %r matched %d request(s)", query, len(results))
        return results

    async def create_request(self, data: ServiceRequestCreate) -> ServiceRequest:
        request = ServiceRequest(
            product_name=data.product_name,
            serial_number=data.serial_number,
            customer_name=data.customer_name,
            customer_contact=data.customer_contact,
            issue_description=data.issue_description,
            status=data.status,
            attachments=list(data.attachments),
        )
        created = await self._store.create(request)
        logger.info("Created service request %s (%s)", created.id, created.product_name)
        return created

    async def update_request(
        self, request_id: str, data: ServiceRequestUpdate
    ) -> ServiceRequest:
        changes = data.changes()
        updated = await self._store.update(request_id, changes)
        if updated is None:
            raise EntityNotFoundError("ServiceRequest", request_id)
        if "status" in changes:
            logger.info("Service request %s is now '%s'", request_id, updated.status.value)
        return updated

    async def delete_request(self, request_id: str) -> bool:
        deleted = await self._store.delete(request_id)
        if deleted:
            logger.info("Deleted service request %s", request_id)
        return deleted

    async def append_attachments(
        self, request_id: str, attachments: list[str]
    ) -> ServiceRequest:
        """Append references after the existing ones, preserving order.

        This is a plain read-then-write with no lock: two concurrent appends
        to the same request can race and the later write wins.
        """
        request = await self.get_request(request_id)
        merged = [*request.attachments, *attachments]
        updated = await self._store.update(request_id, {"attachments": merged})
        if updated is None:
            raise EntityNotFoundError("ServiceRequest", request_id)
        logger.info(
            "Appended %d attachment(s) to service request %s", len(attachments), request_id
        )
        return updated

    async def list_comments(self, request_id: str) -> list[Comment]:
        return await self._store.list_comments(request_id)

    async def add_comment(self, request_id: str, data: CommentCreate) -> Comment:
        comment = Comment(
            service_request_id=request_id,
            text=data.text,
            attachments=list(data.attachments),
        )
        created = await self._store.add_comment(comment)
        logger.info("Added comment %s to service request %s", created.id, request_id)
        return created

    async def get_metrics(self) -> ServiceMetrics:
        return await self._store.metrics()
