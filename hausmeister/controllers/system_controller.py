# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: System endpoints — health, readiness, metrics.
Pure HTTP layer — no business logic.
"""

from datetime import datetime, timezone

from fastapi import APIRouter
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from hausmeister.core.config import settings
from hausmeister.core.dependencies import get_duty_service

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check():
    """Liveness probe for Docker and orchestration."""
    duty_service = get_duty_service()
    snapshot = duty_service.snapshot
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "data_fetched": duty_service.data_fetched,
        "occurrences_count": len(snapshot.occurrences) if snapshot else 0,
        "refresh_failed": duty_service.error_on_refresh,
    }


@router.get("/health/ready")
def readiness_check():
    """Readiness probe — verifies a snapshot is available to serve."""
    duty_service = get_duty_service()
    return {
        "status": "ready",
        "service": settings.SERVICE_NAME,
        "snapshot_loaded": duty_service.snapshot is not None,
    }


@router.get("/metrics")
def prometheus_metrics():
    """Expose Prometheus metrics in OpenMetrics format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
