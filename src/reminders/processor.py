"""Processing pass that sends due reminders and records the ones delivered."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from datetime import datetime
from functools import lru_cache

from sqlalchemy.orm import Session

from src.database.connection import get_session
from src.database.reminders import Reminder, get_due_reminders, mark_reminder_sent
from src.messaging.email import EmailClient, EmailNotifier, get_email_settings
from src.reminders.config import get_reminder_settings
from src.reminders.dispatcher import NotificationDispatcher
from src.utils.dates import utc_now

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractContextManager[Session]]


@dataclass
class ProcessingStats:
    """Stats for a single processing pass."""

    started_at: datetime
    due: int = 0
    sent: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)
    skipped: bool = False
    aborted: bool = False


class ReminderProcessor:
    """Finds due reminders, dispatches each one and marks the successes as sent.

    Only one pass runs at a time: a pass requested while another is running
    (from the timer or a manual trigger) is skipped. Reminders are processed
    one after another, and a failed reminder stays unsent so the next pass
    retries it.
    """

    def __init__(
        self,
        dispatcher: NotificationDispatcher,
        session_factory: SessionFactory = get_session,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialise the processor.

        :param dispatcher: Dispatcher used to send each reminder.
        :param session_factory: Context manager factory yielding database sessions.
        :param clock: Source of the current time.
        """
        self._dispatcher = dispatcher
        self._session_factory = session_factory
        self._clock = clock
        self._pass_lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        """Whether a processing pass is in progress."""
        return self._pass_lock.locked()

    def process_due_reminders(self) -> ProcessingStats:
        """Run one processing pass unless one is already running.

        Never raises: per-reminder failures are counted, and a failure to load
        the due set ends the pass early with aborted=True.

        :returns: Stats for the pass (skipped=True if another pass was running).
        """
        now = self._clock()
        stats = ProcessingStats(started_at=now)

        if not self._pass_lock.acquire(blocking=False):
            logger.info("Reminder processor already running, skipping")
            stats.skipped = True
            return stats

        try:
            self._run_pass(now, stats)
        except Exception as e:
            stats.aborted = True
            stats.errors.append(f"Processing pass failed: {e}")
            logger.exception(f"Error processing due reminders: {e}")
        finally:
            self._pass_lock.release()

        return stats

    def trigger_now(self) -> ProcessingStats:
        """Run a processing pass outside the schedule.

        :returns: Stats for the pass.
        """
        logger.info("Manually triggering reminder processing")
        return self.process_due_reminders()

    def _run_pass(self, now: datetime, stats: ProcessingStats) -> None:
        logger.info(f"Processing due reminders at {now.isoformat()}")

        with self._session_factory() as session:
            due_reminders = get_due_reminders(session, now)

        if not due_reminders:
            logger.info("No due reminders found")
            return

        stats.due = len(due_reminders)
        logger.info(f"Found {stats.due} due reminder(s)")

        for reminder in due_reminders:
            if self._process_reminder(reminder, stats):
                stats.sent += 1
            else:
                stats.failed += 1

        logger.info(
            f"Reminder processing complete: sent={stats.sent}, failed={stats.failed}"
        )

    def _process_reminder(self, reminder: Reminder, stats: ProcessingStats) -> bool:
        """Dispatch one reminder and mark it sent if delivery succeeded.

        :returns: True if the notification was delivered and nothing failed after it.
        """
        result = self._dispatcher.dispatch(reminder, reminder.owner, reminder.application)
        if not result.success:
            error_msg = f"Failed to send reminder {reminder.id}: {result.error}"
            logger.error(error_msg)
            stats.errors.append(error_msg)
            return False

        try:
            with self._session_factory() as session:
                marked = mark_reminder_sent(session, reminder.id, self._clock())
        except Exception as e:
            error_msg = f"Failed to mark reminder {reminder.id} as sent: {e}"
            logger.exception(error_msg)
            stats.errors.append(error_msg)
            return False

        if not marked:
            logger.warning(
                f"Sent reminder {reminder.id} but it was not marked: "
                "deleted or already marked sent during the pass"
            )
            return True

        logger.info(f"Sent reminder {reminder.id} ({reminder.reminder_type})")
        return True


@lru_cache
def get_reminder_processor() -> ReminderProcessor:
    """Get the process-wide reminder processor.

    The scheduler and the manual triggers share this instance so they also
    share its running guard.

    :returns: Shared ReminderProcessor instance.
    """
    settings = get_reminder_settings()
    notifier = EmailNotifier(EmailClient(get_email_settings()))
    dispatcher = NotificationDispatcher(
        notifier,
        timeout_seconds=settings.dispatch_timeout_seconds,
    )
    return ReminderProcessor(dispatcher)
