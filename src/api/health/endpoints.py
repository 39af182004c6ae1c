"""Health check endpoints."""

import logging

from fastapi import APIRouter, Request

from src.api.health.models import HealthResponse, SchedulerHealth

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

APP_VERSION = "0.1.0"


def _scheduler_health(request: Request) -> SchedulerHealth:
    scheduler = getattr(request.app.state, "reminder_scheduler", None)
    if scheduler is None:
        return SchedulerHealth(state="disabled")
    return SchedulerHealth(
        state="running" if scheduler.is_started else "stopped",
        processing=scheduler.is_processing,
    )


@router.get(
    "",
    response_model=HealthResponse,
    summary="Check service health",
    description="Returns the health status of the API service and the reminder scheduler.",
)
def health_check(request: Request) -> HealthResponse:
    """Check if the API service is healthy.

    :param request: The incoming request, used to reach the app state.
    :returns: Health status response.
    """
    logger.debug("Health check requested")
    return HealthResponse(
        status="healthy",
        version=APP_VERSION,
        scheduler=_scheduler_health(request),
    )
