from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from webapi.config.dependencies import get_metrics, get_settings, get_user_repository
from webapi.config.settings import Settings
from webapi.shared.metrics import MetricsCollector
from webapi.users.repository import InMemoryUserRepository

# Create FastAPI router for health endpoints
health_router = APIRouter(prefix="/health", tags=["health"])


@health_router.get("", summary="Liveness and store summary")
async def health(
    settings: Settings = Depends(get_settings),
    repository: InMemoryUserRepository = Depends(get_user_repository),
    metrics: MetricsCollector = Depends(get_metrics),
):
    """
    Report that the service is up, how many users it holds and the
    request counters collected so far.
    """
    metrics.report()
    return {
        "status": "UP",
        "application": settings.app.app_name,
        "users": repository.count(),
        "metrics": metrics.snapshot(),
        "checked_at": datetime.now(timezone.utc).isoformat(),
    }
