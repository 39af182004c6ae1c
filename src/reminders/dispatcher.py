"""Route due reminders to the notification channel and report the outcome."""

from __future__ import annotations

import concurrent.futures
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from src.enums import ReminderType
from src.reminders.exceptions import DispatchTimeoutError

if TYPE_CHECKING:
    import uuid

    from src.database.applications import JobApplication, User
    from src.database.reminders import Reminder

logger = logging.getLogger(__name__)

# Default maximum seconds for a single send
DEFAULT_DISPATCH_TIMEOUT_SECONDS = 30.0


class ReminderNotifier(Protocol):
    """External send operations used by the dispatcher.

    Implementations raise on failure; returning normally means the
    notification was accepted by the channel.
    """

    def send_interview_reminder(self, owner: User, application: JobApplication) -> None:
        """Notify the owner about an upcoming interview."""
        ...

    def send_generic_reminder(
        self,
        owner: User,
        application: JobApplication,
        reminder_type: ReminderType,
    ) -> None:
        """Notify the owner with a follow-up, deadline or response reminder."""
        ...


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of dispatching a single reminder."""

    reminder_id: uuid.UUID
    success: bool
    error: str | None = None


class NotificationDispatcher:
    """Sends one notification per reminder, choosing the operation by type.

    Failures are returned, not raised, and never retried here: an unsent
    reminder is simply picked up again on the next processing pass.
    """

    def __init__(
        self,
        notifier: ReminderNotifier,
        timeout_seconds: float | None = DEFAULT_DISPATCH_TIMEOUT_SECONDS,
    ) -> None:
        """Initialise the dispatcher.

        :param notifier: The external send operations.
        :param timeout_seconds: Maximum seconds for a single send. None disables
            the timeout.
        """
        self._notifier = notifier
        self._timeout_seconds = timeout_seconds
        self._executor_lock = threading.Lock()
        self._executor = self._new_executor()

    def dispatch(
        self,
        reminder: Reminder,
        owner: User | None,
        application: JobApplication | None,
    ) -> DispatchResult:
        """Send the notification for a reminder.

        :param reminder: The due reminder.
        :param owner: The reminder's owner.
        :param application: The job application the reminder concerns.
        :returns: Success, or failure with the error message.
        """
        if owner is None or application is None:
            return DispatchResult(
                reminder_id=reminder.id,
                success=False,
                error="Reminder missing owner or application data",
            )

        send = self._resolve_send(reminder, owner, application)
        try:
            self._run_with_timeout(reminder, send)
        except Exception as e:
            logger.warning(f"Dispatch failed: reminder_id={reminder.id}, error={e}")
            return DispatchResult(reminder_id=reminder.id, success=False, error=str(e))

        logger.debug(f"Dispatched reminder: id={reminder.id}, type={reminder.reminder_type}")
        return DispatchResult(reminder_id=reminder.id, success=True)

    def close(self) -> None:
        """Shut down the send executor without waiting for stuck sends."""
        with self._executor_lock:
            self._executor.shutdown(wait=False)

    def _resolve_send(
        self,
        reminder: Reminder,
        owner: User,
        application: JobApplication,
    ) -> Callable[[], None]:
        reminder_type = ReminderType(reminder.reminder_type)
        if reminder_type == ReminderType.INTERVIEW:
            return lambda: self._notifier.send_interview_reminder(owner, application)
        return lambda: self._notifier.send_generic_reminder(owner, application, reminder_type)

    def _run_with_timeout(self, reminder: Reminder, send: Callable[[], None]) -> None:
        """Run a send on the worker thread, bounded by the dispatch timeout.

        :raises DispatchTimeoutError: If the send does not finish in time.
        """
        with self._executor_lock:
            future = self._executor.submit(send)

        try:
            future.result(timeout=self._timeout_seconds)
        except concurrent.futures.TimeoutError as e:
            future.cancel()
            # The stuck send keeps its thread; later sends get a fresh worker
            with self._executor_lock:
                self._executor.shutdown(wait=False)
                self._executor = self._new_executor()
            raise DispatchTimeoutError(reminder.id, self._timeout_seconds or 0) from e

    @staticmethod
    def _new_executor() -> concurrent.futures.ThreadPoolExecutor:
        return concurrent.futures.ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="reminder-dispatch",
        )
