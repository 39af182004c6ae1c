"""Background hooks run when job applications change.

The application service calls these after it has persisted a change. The
work happens on a background executor so reminder bookkeeping can never
fail or slow down the caller; outcomes are reported through logging.
"""

from __future__ import annotations

import concurrent.futures
import logging
import uuid
from collections.abc import Callable
from contextlib import AbstractContextManager
from datetime import datetime
from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from src.database.connection import get_session
from src.database.reminders import delete_reminders_for_application
from src.enums import ApplicationStatus
from src.reminders.config import ReminderConfig, get_reminder_settings
from src.reminders.rules import StatusChange, apply_status_change, build_status_change

if TYPE_CHECKING:
    from src.database.applications import JobApplication

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractContextManager[Session]]


class ApplicationHooks:
    """Submits reminder side effects of application changes to a worker pool."""

    def __init__(
        self,
        session_factory: SessionFactory = get_session,
        config: ReminderConfig | None = None,
    ) -> None:
        """Initialise the hooks.

        :param session_factory: Context manager factory yielding database sessions.
        :param config: Reminder settings. Defaults to the environment settings.
        """
        self._session_factory = session_factory
        self._config = config or get_reminder_settings()
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=self._config.hook_workers,
            thread_name_prefix="reminder-hooks",
        )

    def on_status_change(
        self,
        user_id: uuid.UUID,
        application: JobApplication,
        old_status: ApplicationStatus | str,
        new_status: ApplicationStatus | str,
        now: datetime | None = None,
    ) -> concurrent.futures.Future[int] | None:
        """Create any automatic reminders for a status change in the background.

        :param user_id: ID of the application's owner.
        :param application: The application after the status update.
        :param old_status: Status before the change.
        :param new_status: Status after the change.
        :param now: Time of the change (defaults to now).
        :returns: Future resolving to the number of reminders created, or None
            if the status did not change or the work could not be submitted.
        """
        try:
            if ApplicationStatus(old_status) == ApplicationStatus(new_status):
                return None

            change = build_status_change(
                user_id=user_id,
                application_id=application.id,
                company=application.company,
                reference_date=application.date_applied,
                old_status=old_status,
                new_status=new_status,
                now=now,
            )
            future = self._executor.submit(self._create_reminders, change)
        except Exception as e:
            logger.exception(
                f"Failed to submit reminder hook: status change for application "
                f"{application.id}: {e}"
            )
            return None

        future.add_done_callback(
            self._log_outcome(f"status change for application {application.id}")
        )
        return future

    def on_application_deleted(
        self, application_id: uuid.UUID
    ) -> concurrent.futures.Future[int] | None:
        """Delete an application's reminders in the background.

        :param application_id: ID of the deleted application.
        :returns: Future resolving to the number of reminders deleted, or None
            if the work could not be submitted.
        """
        try:
            future = self._executor.submit(self._delete_reminders, application_id)
        except Exception as e:
            logger.exception(
                f"Failed to submit reminder hook: deletion of application {application_id}: {e}"
            )
            return None

        future.add_done_callback(self._log_outcome(f"deletion of application {application_id}"))
        return future

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work and optionally wait for queued hooks."""
        self._executor.shutdown(wait=wait)

    def _create_reminders(self, change: StatusChange) -> int:
        with self._session_factory() as session:
            reminders = apply_status_change(session, change, self._config)
            return len(reminders)

    def _delete_reminders(self, application_id: uuid.UUID) -> int:
        with self._session_factory() as session:
            return delete_reminders_for_application(session, application_id)

    @staticmethod
    def _log_outcome(description: str) -> Callable[[concurrent.futures.Future[int]], None]:
        """Build a done-callback that reports a hook's result or failure."""

        def callback(future: concurrent.futures.Future[int]) -> None:
            if future.cancelled():
                logger.warning(f"Reminder hook cancelled: {description}")
                return

            error = future.exception()
            if error is not None:
                logger.error(
                    f"Reminder hook failed: {description}: {error}",
                    exc_info=(type(error), error, error.__traceback__),
                )
                return

            logger.info(f"Reminder hook complete: {description}, affected={future.result()}")

        return callback


@lru_cache
def get_application_hooks() -> ApplicationHooks:
    """Get the process-wide application hooks.

    :returns: Shared ApplicationHooks instance.
    """
    return ApplicationHooks()

