"""In-process timer that runs the reminder processor at a fixed interval."""

from __future__ import annotations

import logging
import signal
import threading
from types import FrameType

from dotenv import load_dotenv

from src.database.connection import dispose_engine
from src.observability.sentry import init_sentry
from src.paths import PROJECT_ROOT
from src.reminders.config import get_reminder_settings
from src.reminders.processor import ReminderProcessor, get_reminder_processor
from src.utils.logging import configure_logging

logger = logging.getLogger(__name__)


class ReminderScheduler:
    """Runs processing passes on a background thread.

    Passes that fire while the previous one is still running are skipped by
    the processor's running guard, never queued.
    """

    def __init__(
        self,
        processor: ReminderProcessor,
        interval_seconds: float,
        run_on_start: bool = True,
    ) -> None:
        """Initialise the scheduler.

        :param processor: The processor to run.
        :param interval_seconds: Seconds between passes.
        :param run_on_start: Run one pass immediately when started.
        """
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")

        self._processor = processor
        self._interval_seconds = interval_seconds
        self._run_on_start = run_on_start
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_started(self) -> bool:
        """Whether the timer thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    @property
    def is_processing(self) -> bool:
        """Whether a processing pass is in progress."""
        return self._processor.is_running

    def start(self) -> None:
        """Start the timer, then run the initial pass on the calling thread.

        The timer is registered before the initial pass, so a slow first pass
        overlaps the first tick and that tick is skipped.
        """
        if self.is_started:
            logger.warning("Reminder scheduler already started")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run_loop,
            name="reminder-scheduler",
            daemon=True,
        )
        self._thread.start()
        logger.info(f"Reminder scheduler started: interval={self._interval_seconds}s")

        if self._run_on_start:
            self._processor.process_due_reminders()

    def stop(self, timeout: float | None = None) -> None:
        """Stop the timer and wait for the current pass to finish.

        Returns early if the timeout expires first; calling stop() again waits
        for the remainder of the pass.

        :param timeout: Maximum seconds to wait for the timer thread.
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                logger.info("Reminder scheduler stopping, waiting for the current pass")
                return
            self._thread = None
        logger.info("Reminder scheduler stopped")

    def wait(self) -> None:
        """Block until stop() is called."""
        self._stop_event.wait()

    def _run_loop(self) -> None:
        while not self._stop_event.wait(self._interval_seconds):
            try:
                self._processor.process_due_reminders()
            except Exception:
                logger.exception("Unexpected error in reminder scheduler tick")


def main() -> None:
    """Run the reminder scheduler until SIGINT or SIGTERM."""
    load_dotenv(PROJECT_ROOT / ".env")
    configure_logging()
    init_sentry()

    settings = get_reminder_settings()
    scheduler = ReminderScheduler(
        processor=get_reminder_processor(),
        interval_seconds=settings.interval_seconds,
        run_on_start=settings.run_on_start,
    )

    def signal_handler(signum: int, frame: FrameType | None) -> None:
        logger.info(f"Received signal {signum}, initiating shutdown")
        scheduler.stop(timeout=0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    scheduler.start()
    scheduler.wait()
    scheduler.stop()
    dispose_engine()
    logger.info("Reminder worker stopped")
