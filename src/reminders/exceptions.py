"""Custom exceptions for the reminder subsystem."""

import uuid


class ReminderError(Exception):
    """Base exception for reminder-related errors."""


class ReminderValidationError(ReminderError):
    """Raised when reminder data breaks a business rule (e.g. a past trigger time)."""


class ReminderAlreadySentError(ReminderError):
    """Raised when editing a reminder that has already been sent."""

    def __init__(self, reminder_id: uuid.UUID) -> None:
        """Initialise ReminderAlreadySentError.

        :param reminder_id: ID of the sent reminder.
        """
        self.reminder_id = reminder_id
        super().__init__(f"Reminder already sent: {reminder_id}")


class DispatchTimeoutError(ReminderError):
    """Raised when a notification send exceeds the dispatch timeout."""

    def __init__(self, reminder_id: uuid.UUID, timeout_seconds: float) -> None:
        """Initialise DispatchTimeoutError.

        :param reminder_id: ID of the reminder being dispatched.
        :param timeout_seconds: The timeout that was exceeded.
        """
        self.reminder_id = reminder_id
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Dispatch timed out after {timeout_seconds}s for reminder {reminder_id}"
        )
