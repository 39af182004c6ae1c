"""Tests for the notification dispatcher."""

import threading
import unittest
from unittest.mock import MagicMock
from uuid import uuid4

from src.database.applications import JobApplication, User
from src.database.reminders import Reminder
from src.enums import ReminderType
from src.reminders.dispatcher import NotificationDispatcher


def _reminder(reminder_type: ReminderType) -> Reminder:
    return Reminder(id=uuid4(), reminder_type=reminder_type.value, sent=False)


class TestNotificationDispatcher(unittest.TestCase):
    """Tests for NotificationDispatcher.dispatch."""

    def setUp(self) -> None:
        """Set up a mock notifier and a dispatcher around it."""
        self.notifier = MagicMock()
        self.dispatcher = NotificationDispatcher(self.notifier, timeout_seconds=5)
        self.owner = User(id=uuid4(), email="ada@example.com", first_name="Ada")
        self.application = JobApplication(id=uuid4(), company="Acme", job_title="Engineer")

    def tearDown(self) -> None:
        """Shut down the dispatcher."""
        self.dispatcher.close()

    def test_interview_routes_to_interview_send(self) -> None:
        """Test interview reminders use the interview operation."""
        reminder = _reminder(ReminderType.INTERVIEW)

        result = self.dispatcher.dispatch(reminder, self.owner, self.application)

        self.assertTrue(result.success)
        self.assertEqual(result.reminder_id, reminder.id)
        self.notifier.send_interview_reminder.assert_called_once_with(
            self.owner, self.application
        )
        self.notifier.send_generic_reminder.assert_not_called()

    def test_other_types_route_to_generic_send(self) -> None:
        """Test every non-interview type uses the generic operation with its type."""
        for reminder_type in (
            ReminderType.FOLLOW_UP,
            ReminderType.DEADLINE,
            ReminderType.RESPONSE,
        ):
            with self.subTest(reminder_type=reminder_type):
                self.notifier.reset_mock()

                result = self.dispatcher.dispatch(
                    _reminder(reminder_type), self.owner, self.application
                )

                self.assertTrue(result.success)
                self.notifier.send_generic_reminder.assert_called_once_with(
                    self.owner, self.application, reminder_type
                )
                self.notifier.send_interview_reminder.assert_not_called()

    def test_send_exception_is_a_failure(self) -> None:
        """Test a raising notifier yields a failure result instead of an exception."""
        self.notifier.send_generic_reminder.side_effect = RuntimeError("SMTP down")

        result = self.dispatcher.dispatch(
            _reminder(ReminderType.FOLLOW_UP), self.owner, self.application
        )

        self.assertFalse(result.success)
        self.assertEqual(result.error, "SMTP down")
        self.notifier.send_generic_reminder.assert_called_once()

    def test_missing_owner_or_application_is_a_failure(self) -> None:
        """Test a reminder without owner or application data is not sent."""
        reminder = _reminder(ReminderType.FOLLOW_UP)

        no_owner = self.dispatcher.dispatch(reminder, None, self.application)
        no_application = self.dispatcher.dispatch(reminder, self.owner, None)

        self.assertFalse(no_owner.success)
        self.assertFalse(no_application.success)
        self.assertIn("missing owner or application", no_owner.error)
        self.notifier.send_generic_reminder.assert_not_called()

    def test_timeout_is_a_failure_and_later_sends_proceed(self) -> None:
        """Test a hung send times out and does not block the next dispatch."""
        release = threading.Event()
        self.notifier.send_interview_reminder.side_effect = lambda *args: release.wait(5)
        dispatcher = NotificationDispatcher(self.notifier, timeout_seconds=0.1)

        try:
            timed_out = dispatcher.dispatch(
                _reminder(ReminderType.INTERVIEW), self.owner, self.application
            )
            followed = dispatcher.dispatch(
                _reminder(ReminderType.FOLLOW_UP), self.owner, self.application
            )
        finally:
            release.set()
            dispatcher.close()

        self.assertFalse(timed_out.success)
        self.assertIn("timed out", timed_out.error)
        self.assertTrue(followed.success)


if __name__ == "__main__":
    unittest.main()
