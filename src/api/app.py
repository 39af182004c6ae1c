"""FastAPI application configuration."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from src.api.admin import router as admin_router
from src.api.dependencies import verify_token
from src.api.health import router as health_router
from src.api.models import ErrorResponse
from src.api.reminders import router as reminders_router
from src.database.connection import dispose_engine
from src.observability.sentry import init_sentry
from src.reminders.config import get_reminder_settings
from src.reminders.hooks import get_application_hooks
from src.reminders.processor import get_reminder_processor
from src.reminders.scheduler import ReminderScheduler
from src.utils.logging import configure_logging

configure_logging()
init_sentry()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Start the reminder scheduler with the app and stop it on shutdown.

    :param application: The FastAPI application.
    """
    settings = get_reminder_settings()
    scheduler: ReminderScheduler | None = None

    if settings.scheduler_enabled:
        scheduler = ReminderScheduler(
            processor=get_reminder_processor(),
            interval_seconds=settings.interval_seconds,
            run_on_start=settings.run_on_start,
        )
        scheduler.start()
    else:
        logger.info("Reminder scheduler disabled (REMINDER_SCHEDULER_ENABLED=false)")

    application.state.reminder_scheduler = scheduler
    try:
        yield
    finally:
        if scheduler is not None:
            scheduler.stop()
        get_application_hooks().shutdown(wait=True)
        get_application_hooks.cache_clear()
        dispose_engine()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    :returns: Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Job Tracker Reminders API",
        version="1.0.0",
        lifespan=lifespan,
        responses={
            401: {"model": ErrorResponse, "description": "Unauthorised"},
            500: {"model": ErrorResponse, "description": "Internal server error"},
        },
    )

    # Register routers
    application.include_router(health_router)
    application.include_router(reminders_router, dependencies=[Depends(verify_token)])
    application.include_router(admin_router, dependencies=[Depends(verify_token)])

    logger.info("FastAPI application created")

    return application


# Application instance for uvicorn
app = create_app()
