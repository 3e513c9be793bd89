"""In-process ServiceRequestStore — keyed collections, lost on restart.

Selected with ``STORAGE_BACKEND=memory``. Useful for local demos and tests;
it shares the contract of the SQL store but does not enforce that a
comment's ``service_request_id`` points at an existing request.
"""

import logging
from dataclasses import replace
from typing import Any

from app.application.interfaces import ServiceRequestStore
from app.domain.entities import Comment, ServiceRequest

logger = logging.getLogger(__name__)


def _copy_request(request: ServiceRequest) -> ServiceRequest:
    return replace(request, attachments=list(request.attachments))


def _copy_comment(comment: Comment) -> Comment:
    return replace(comment, attachments=list(comment.attachments))


class InMemoryServiceRequestStore(ServiceRequestStore):
    """Implements the ServiceRequestStore port with plain dicts.

    Entities are copied on the way in and out, so callers never hold a
    reference to the canonical record.
    """

    def __init__(self) -> None:
        self._requests: dict[str, ServiceRequest] = {}
        self._comments: dict[str, Comment] = {}

    def _newest_first(self, requests: list[ServiceRequest]) -> list[ServiceRequest]:
        # Reversed insertion order keeps identical timestamps newest-first too
        ordered = sorted(reversed(requests), key=lambda r: r.created_at, reverse=True)
        return [_copy_request(r) for r in ordered]

    async def get(self, request_id: str) -> ServiceRequest | None:
        request = self._requests.get(request_id)
        return _copy_request(request) if request else None

    async def list_all(self) -> list[ServiceRequest]:
        return self._newest_first(list(self._requests.values()))

    async def list_active(self) -> list[ServiceRequest]:
        return self._newest_first([r for r in self._requests.values() if r.is_active])

    async def list_completed(self) -> list[ServiceRequest]:
        return self._newest_first([r for r in self._requests.values() if not r.is_active])

    async def search(self, query: str) -> list[ServiceRequest]:
        return self._newest_first([r for r in self._requests.values() if r.matches(query)])

    async def create(self, request: ServiceRequest) -> ServiceRequest:
        self._requests[request.id] = _copy_request(request)
        return _copy_request(request)

    async def update(self, request_id: str, changes: dict[str, Any]) -> ServiceRequest | None:
        current = self._requests.get(request_id)
        if current is None:
            return None
        updated = _copy_request(current)
        updated.apply(changes)
        self._requests[request_id] = updated
        return _copy_request(updated)

    async def delete(self, request_id: str) -> bool:
        orphaned = [
            c.id for c in self._comments.values() if c.service_request_id == request_id
        ]
        for comment_id in orphaned:
            del self._comments[comment_id]
        if request_id not in self._requests:
            return False
        del self._requests[request_id]
        logger.debug("Removed request %s and %d comment(s)", request_id, len(orphaned))
        return True

    async def list_comments(self, request_id: str) -> list[Comment]:
        comments = [
            c for c in self._comments.values() if c.service_request_id == request_id
        ]
        return [_copy_comment(c) for c in sorted(comments, key=lambda c: c.created_at)]

    async def add_comment(self, comment: Comment) -> Comment:
        self._comments[comment.id] = _copy_comment(comment)
        return _copy_comment(comment)
