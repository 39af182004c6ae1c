"""Admin endpoints for operating the reminder scheduler."""

import logging
import time

from fastapi import APIRouter

from src.api.admin.models import ProcessRemindersResponse
from src.reminders.processor import get_reminder_processor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/reminders/process",
    response_model=ProcessRemindersResponse,
    summary="Process due reminders now",
)
def process_reminders() -> ProcessRemindersResponse:
    """Run a reminder processing pass immediately.

    Shares the running guard with the scheduler: if a pass is already in
    progress, this returns straight away with skipped=true.
    """
    start = time.perf_counter()
    logger.info("Manual reminder processing requested")

    stats = get_reminder_processor().trigger_now()

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"Manual reminder processing complete: skipped={stats.skipped}, sent={stats.sent}, "
        f"failed={stats.failed}, elapsed={elapsed_ms:.0f}ms"
    )

    return ProcessRemindersResponse(
        started_at=stats.started_at,
        skipped=stats.skipped,
        aborted=stats.aborted,
        due=stats.due,
        sent=stats.sent,
        failed=stats.failed,
        errors=stats.errors,
    )
