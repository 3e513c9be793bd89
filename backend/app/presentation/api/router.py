"""Top-level API router — includes the endpoint routers under /api."""

from fastapi import APIRouter

from app.presentation.api.endpoints.health import router as health_router
from app.presentation.api.endpoints.metrics import router as metrics_router
from app.presentation.api.endpoints.objects import router as objects_router
from app.presentation.api.endpoints.service_requests import router as service_requests_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(service_requests_router)
router.include_router(metrics_router)
router.include_router(objects_router)
