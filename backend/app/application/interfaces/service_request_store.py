"""Abstract storage interface (port) for service requests and their comments."""

from abc import ABC, abstractmethod
from typing import Any

from app.domain.entities import Comment, ServiceMetrics, ServiceRequest


class ServiceRequestStore(ABC):
    """Port for service request persistence — implemented in the infrastructure layer.

    Request listings are newest-first by ``created_at``; comment listings are
    oldest-first.
    """

    @abstractmethod
    async def get(self, request_id: str) -> ServiceRequest | None:
        """Retrieve a single service request by its UUID."""
        ...

    @abstractmethod
    async def list_all(self) -> list[ServiceRequest]:
        """Every service request."""
        ...

    @abstractmethod
    async def list_active(self) -> list[ServiceRequest]:
        """Service requests whose status is not ``completed``."""
        ...

    @abstractmethod
    async def list_completed(self) -> list[ServiceRequest]:
        """Service requests whose status is ``completed``."""
        ...

    @abstractmethod
    async def search(self, query: str) -> list[ServiceRequest]:
        """Case-insensitive substring search over contact, serial, customer and product."""
        ...

    @abstractmethod
    async def create(self, request: ServiceRequest) -> ServiceRequest:
        """Persist a new service request and return it."""
        ...

    @abstractmethod
    async def update(self, request_id: str, changes: dict[str, Any]) -> ServiceRequest | None:
        """Merge *changes* onto a stored request. Returns None if it does not exist."""
        ...

    @abstractmethod
    async def delete(self, request_id: str) -> bool:
        """Delete a request and its comments. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def list_comments(self, request_id: str) -> list[Comment]:
        """Comments on a request, oldest first."""
        ...

    @abstractmethod
    async def add_comment(self, comment: Comment) -> Comment:
        """Persist a new comment and return it."""
        ...

    async def metrics(self) -> ServiceMetrics:
        """Dashboard counters, always recomputed from the active set."""
        return ServiceMetrics.from_requests(await self.list_active())
