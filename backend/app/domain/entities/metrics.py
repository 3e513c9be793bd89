"""Dashboard counters derived from the set of active service requests."""

from collections.abc import Iterable
from dataclasses import dataclass

from app.domain.entities.service_request import ServiceRequest, ServiceRequestStatus


@dataclass(frozen=True)
class ServiceMetrics:
    """Counts of active requests per workflow state.

    Completed requests are never counted, so the four status counters
    always add up to ``total_active``.
    """

    total_active: int = 0
    new_complaints: int = 0
    under_inspection: int = 0
    sent_to_service: int = 0
    received: int = 0

    @classmethod
    def from_requests(cls, requests: Iterable[ServiceRequest]) -> "ServiceMetrics":
        active = [r for r in requests if r.is_active]
        by_status = {status: 0 for status in ServiceRequestStatus}
        for request in active:
            by_status[request.status] += 1
        return cls(
            total_active=len(active),
            new_complaints=by_status[ServiceRequestStatus.NEW],
            under_inspection=by_status[ServiceRequestStatus.INSPECTION],
            sent_to_service=by_status[ServiceRequestStatus.SERVICE],
            received=by_status[ServiceRequestStatus.RECEIVED],
        )
