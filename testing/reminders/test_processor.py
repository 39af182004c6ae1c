"""Tests for the reminder processor."""

import threading
import unittest
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import timedelta
from unittest.mock import MagicMock, patch

from sqlalchemy.orm import Session

from src.database.applications import JobApplication, User
from src.database.reminders import Reminder
from src.enums import ReminderType
from src.reminders.dispatcher import NotificationDispatcher
from src.reminders.processor import ProcessingStats, ReminderProcessor
from src.utils.dates import ensure_utc
from testing.database.fixtures import NOW, SqliteDatabase


class ProcessorTestCase(unittest.TestCase):
    """Base class with a seeded database and a processor around a mock notifier."""

    def setUp(self) -> None:
        """Create the database, notifier, dispatcher and processor."""
        self.db = SqliteDatabase()
        self.user = self.db.add_user()
        self.application = self.db.add_application(self.user, company="Acme")
        self.notifier = MagicMock()
        self.dispatcher = NotificationDispatcher(self.notifier, timeout_seconds=5)
        self.processor = ReminderProcessor(
            self.dispatcher,
            session_factory=self.db.session,
            clock=lambda: NOW,
        )

    def tearDown(self) -> None:
        """Release the dispatcher and database."""
        self.dispatcher.close()
        self.db.dispose()


class TestProcessDueReminders(ProcessorTestCase):
    """Tests for ReminderProcessor.process_due_reminders."""

    def test_sends_and_marks_due_reminders(self) -> None:
        """Test due reminders are sent and marked, future ones are left alone."""
        due = self.db.add_reminder(self.application, NOW - timedelta(minutes=5))
        future = self.db.add_reminder(self.application, NOW + timedelta(minutes=5))

        stats = self.processor.process_due_reminders()

        self.assertEqual((stats.due, stats.sent, stats.failed), (1, 1, 0))
        self.assertFalse(stats.skipped)
        stored_due = self.db.get_reminder(due.id)
        self.assertTrue(stored_due.sent)
        self.assertEqual(ensure_utc(stored_due.sent_at), NOW)
        self.assertFalse(self.db.get_reminder(future.id).sent)
        self.notifier.send_generic_reminder.assert_called_once()
        owner, application, reminder_type = self.notifier.send_generic_reminder.call_args.args
        self.assertEqual(owner.email, "ada@example.com")
        self.assertEqual(application.company, "Acme")
        self.assertEqual(reminder_type, ReminderType.FOLLOW_UP)

    def test_interview_reminder_uses_interview_send(self) -> None:
        """Test interview reminders are routed to the interview notification."""
        self.db.add_reminder(
            self.application, NOW - timedelta(minutes=5), reminder_type=ReminderType.INTERVIEW
        )

        stats = self.processor.process_due_reminders()

        self.assertEqual(stats.sent, 1)
        self.notifier.send_interview_reminder.assert_called_once()

    def test_empty_due_set(self) -> None:
        """Test a pass with nothing due sends nothing."""
        self.db.add_reminder(self.application, NOW + timedelta(days=1))

        stats = self.processor.process_due_reminders()

        self.assertEqual((stats.due, stats.sent, stats.failed), (0, 0, 0))
        self.notifier.send_generic_reminder.assert_not_called()

    def test_sent_reminders_are_not_resent(self) -> None:
        """Test a second pass does not send an already sent reminder again."""
        self.db.add_reminder(self.application, NOW - timedelta(minutes=5))

        first = self.processor.process_due_reminders()
        second = self.processor.process_due_reminders()

        self.assertEqual(first.sent, 1)
        self.assertEqual(second.due, 0)
        self.assertEqual(self.notifier.send_generic_reminder.call_count, 1)

    def test_failed_reminder_is_retried_next_pass(self) -> None:
        """Test a failed send leaves the reminder unsent for the next pass."""
        reminder = self.db.add_reminder(self.application, NOW - timedelta(minutes=5))
        self.notifier.send_generic_reminder.side_effect = [RuntimeError("SMTP down"), None]

        with self.assertLogs("src.reminders.processor", level="ERROR") as logs:
            first = self.processor.process_due_reminders()

        self.assertEqual((first.sent, first.failed), (0, 1))
        self.assertFalse(self.db.get_reminder(reminder.id).sent)
        self.assertTrue(any(str(reminder.id) in line for line in logs.output))

        second = self.processor.process_due_reminders()

        self.assertEqual((second.sent, second.failed), (1, 0))
        self.assertTrue(self.db.get_reminder(reminder.id).sent)

    def test_one_failure_does_not_stop_the_batch(self) -> None:
        """Test the reminders around a failing one are still sent."""
        failing_application = self.db.add_application(self.user, company="Broken")
        first = self.db.add_reminder(self.application, NOW - timedelta(minutes=30))
        second = self.db.add_reminder(failing_application, NOW - timedelta(minutes=20))
        third = self.db.add_reminder(self.application, NOW - timedelta(minutes=10))

        def send(owner: User, application: JobApplication, reminder_type: ReminderType) -> None:
            if application.company == "Broken":
                raise RuntimeError("mailbox full")

        self.notifier.send_generic_reminder.side_effect = send

        stats = self.processor.process_due_reminders()

        self.assertEqual((stats.due, stats.sent, stats.failed), (3, 2, 1))
        self.assertTrue(self.db.get_reminder(first.id).sent)
        self.assertFalse(self.db.get_reminder(second.id).sent)
        self.assertTrue(self.db.get_reminder(third.id).sent)
        self.assertEqual(len(stats.errors), 1)
        self.assertIn("mailbox full", stats.errors[0])

    def test_mark_failure_counts_as_failed(self) -> None:
        """Test a failure to record the send is counted and the reminder stays due."""
        reminder = self.db.add_reminder(self.application, NOW - timedelta(minutes=5))

        with patch(
            "src.reminders.processor.mark_reminder_sent",
            side_effect=RuntimeError("write failed"),
        ):
            stats = self.processor.process_due_reminders()

        self.assertEqual((stats.sent, stats.failed), (0, 1))
        self.assertFalse(self.db.get_reminder(reminder.id).sent)

    def test_reminder_deleted_during_send_is_reported(self) -> None:
        """Test a reminder removed while its notification was sending is logged as unmarked."""
        reminder = self.db.add_reminder(self.application, NOW - timedelta(minutes=5))

        def delete_during_send(*args: object) -> None:
            with self.db.session() as session:
                session.delete(session.get(Reminder, reminder.id))

        self.notifier.send_generic_reminder.side_effect = delete_during_send

        with self.assertLogs("src.reminders.processor", level="WARNING") as logs:
            stats = self.processor.process_due_reminders()

        self.assertEqual((stats.sent, stats.failed), (1, 0))
        self.assertTrue(any("was not marked" in line for line in logs.output))
        self.assertIsNone(self.db.get_reminder(reminder.id))

    def test_store_error_aborts_pass_and_releases_guard(self) -> None:
        """Test a failure loading the due set ends the pass and the next pass still runs."""

        @contextmanager
        def broken_session() -> Iterator[Session]:
            raise RuntimeError("connection refused")
            yield MagicMock()  # pragma: no cover

        broken = ReminderProcessor(
            self.dispatcher, session_factory=broken_session, clock=lambda: NOW
        )

        stats = broken.process_due_reminders()

        self.assertTrue(stats.aborted)
        self.assertFalse(broken.is_running)
        self.assertIn("connection refused", stats.errors[0])
        self.assertTrue(broken.process_due_reminders().aborted)


class TestReentrancyGuard(ProcessorTestCase):
    """Tests for the processor's running guard."""

    def test_nested_pass_is_skipped(self) -> None:
        """Test a pass started while one is running returns without work."""
        self.db.add_reminder(self.application, NOW - timedelta(minutes=5))
        nested: list[ProcessingStats] = []

        def send(owner: User, application: JobApplication, reminder_type: ReminderType) -> None:
            self.assertTrue(self.processor.is_running)
            nested.append(self.processor.process_due_reminders())

        self.notifier.send_generic_reminder.side_effect = send

        outer = self.processor.process_due_reminders()

        self.assertEqual(outer.sent, 1)
        self.assertEqual(len(nested), 1)
        self.assertTrue(nested[0].skipped)
        self.assertEqual(nested[0].due, 0)
        self.assertEqual(self.notifier.send_generic_reminder.call_count, 1)
        self.assertFalse(self.processor.is_running)

    def test_manual_trigger_during_scheduled_pass_is_skipped(self) -> None:
        """Test trigger_now from another thread is skipped while a pass runs."""
        self.db.add_reminder(self.application, NOW - timedelta(minutes=5))
        started = threading.Event()
        release = threading.Event()

        def send(owner: User, application: JobApplication, reminder_type: ReminderType) -> None:
            started.set()
            release.wait(5)

        self.notifier.send_generic_reminder.side_effect = send
        results: list[ProcessingStats] = []
        worker = threading.Thread(
            target=lambda: results.append(self.processor.process_due_reminders())
        )
        worker.start()

        try:
            self.assertTrue(started.wait(5))
            manual = self.processor.trigger_now()
        finally:
            release.set()
            worker.join(5)

        self.assertTrue(manual.skipped)
        self.assertEqual(results[0].sent, 1)
        self.assertEqual(self.notifier.send_generic_reminder.call_count, 1)

    def test_trigger_now_runs_a_pass_when_idle(self) -> None:
        """Test the manual trigger processes due reminders when nothing is running."""
        reminder = self.db.add_reminder(self.application, NOW - timedelta(minutes=5))

        stats = self.processor.trigger_now()

        self.assertFalse(stats.skipped)
        self.assertEqual(stats.sent, 1)
        self.assertTrue(self.db.get_reminder(reminder.id).sent)


if __name__ == "__main__":
    unittest.main()
