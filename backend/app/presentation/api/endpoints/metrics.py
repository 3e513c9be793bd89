"""Dashboard metrics endpoint."""

from fastapi import APIRouter, Depends

from app.application.schemas import MetricsResponse
from app.application.services import ServiceRequestService
from app.infrastructure.dependencies import get_service_request_service

router = APIRouter(tags=["Metrics"])


@router.get("/metrics", response_model=MetricsResponse)
async def get_metrics(
    service: ServiceRequestService = Depends(get_service_request_service),
) -> MetricsResponse:
    """Counts of active requests per workflow state, recomputed on every call."""
    metrics = await service.get_metrics()
    return MetricsResponse.model_validate(metrics, from_attributes=True)
