"""Tests for the background application hooks."""

import unittest
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import timedelta
from unittest.mock import MagicMock

from sqlalchemy.orm import Session

from src.enums import ApplicationStatus, ReminderType
from src.reminders.config import ReminderConfig
from src.reminders.hooks import ApplicationHooks
from testing.database.fixtures import NOW, SqliteDatabase

CONFIG = ReminderConfig(follow_up_days=7, interview_lead_days=1, hook_workers=1)


@contextmanager
def _broken_session() -> Iterator[Session]:
    raise RuntimeError("database unavailable")
    yield MagicMock()  # pragma: no cover


class TestApplicationHooks(unittest.TestCase):
    """Tests for ApplicationHooks."""

    def setUp(self) -> None:
        """Create a user with one application."""
        self.db = SqliteDatabase()
        self.user = self.db.add_user()
        self.application = self.db.add_application(
            self.user,
            company="Acme",
            status=ApplicationStatus.APPLIED,
            date_applied=NOW + timedelta(days=5),
        )

    def tearDown(self) -> None:
        """Drop the database."""
        self.db.dispose()

    def test_status_change_creates_reminder_in_background(self) -> None:
        """Test moving to interview creates the interview reminder."""
        hooks = ApplicationHooks(session_factory=self.db.session, config=CONFIG)

        future = hooks.on_status_change(
            self.user.id,
            self.application,
            ApplicationStatus.APPLIED,
            ApplicationStatus.INTERVIEW,
            now=NOW,
        )
        self.assertIsNotNone(future)
        self.assertEqual(future.result(timeout=5), 1)
        hooks.shutdown()

        reminders = self.db.all_reminders()
        self.assertEqual(len(reminders), 1)
        self.assertEqual(reminders[0].reminder_type, ReminderType.INTERVIEW.value)

    def test_unchanged_status_submits_nothing(self) -> None:
        """Test no work is scheduled when the status did not change."""
        session_factory = MagicMock()
        hooks = ApplicationHooks(session_factory=session_factory, config=CONFIG)

        future = hooks.on_status_change(
            self.user.id, self.application, "applied", "applied", now=NOW
        )
        hooks.shutdown()

        self.assertIsNone(future)
        session_factory.assert_not_called()

    def test_failure_is_logged_not_raised(self) -> None:
        """Test a failing hook reports through logging and never raises to the caller."""
        hooks = ApplicationHooks(session_factory=_broken_session, config=CONFIG)

        with self.assertLogs("src.reminders.hooks", level="ERROR") as logs:
            future = hooks.on_status_change(
                self.user.id,
                self.application,
                ApplicationStatus.SAVED,
                ApplicationStatus.APPLIED,
                now=NOW,
            )
            hooks.shutdown(wait=True)

        self.assertIsInstance(future.exception(), RuntimeError)
        self.assertTrue(any("database unavailable" in line for line in logs.output))
        self.assertEqual(self.db.all_reminders(), [])

    def test_application_deleted_removes_reminders(self) -> None:
        """Test deleting an application removes its reminders in the background."""
        self.db.add_reminder(self.application, NOW + timedelta(days=1))
        self.db.add_reminder(self.application, NOW - timedelta(days=1), sent=True)
        hooks = ApplicationHooks(session_factory=self.db.session, config=CONFIG)

        future = hooks.on_application_deleted(self.application.id)

        self.assertEqual(future.result(timeout=5), 2)
        hooks.shutdown()
        self.assertEqual(self.db.all_reminders(), [])

    def test_status_change_after_shutdown_is_logged_not_raised(self) -> None:
        """Test a hook submitted after shutdown logs the error and returns None."""
        hooks = ApplicationHooks(session_factory=self.db.session, config=CONFIG)
        hooks.shutdown(wait=True)

        with self.assertLogs("src.reminders.hooks", level="ERROR") as logs:
            future = hooks.on_status_change(
                self.user.id,
                self.application,
                ApplicationStatus.SAVED,
                ApplicationStatus.APPLIED,
                now=NOW,
            )

        self.assertIsNone(future)
        self.assertTrue(any(str(self.application.id) in line for line in logs.output))
        self.assertEqual(self.db.all_reminders(), [])

    def test_application_deleted_after_shutdown_is_logged_not_raised(self) -> None:
        """Test a deletion hook submitted after shutdown returns None."""
        self.db.add_reminder(self.application, NOW + timedelta(days=1))
        hooks = ApplicationHooks(session_factory=self.db.session, config=CONFIG)
        hooks.shutdown(wait=True)

        with self.assertLogs("src.reminders.hooks", level="ERROR"):
            future = hooks.on_application_deleted(self.application.id)

        self.assertIsNone(future)
        self.assertEqual(len(self.db.all_reminders()), 1)

    def test_unknown_status_is_logged_not_raised(self) -> None:
        """Test an unrecognised status value never raises into the caller."""
        session_factory = MagicMock()
        hooks = ApplicationHooks(session_factory=session_factory, config=CONFIG)

        with self.assertLogs("src.reminders.hooks", level="ERROR"):
            future = hooks.on_status_change(
                self.user.id, self.application, "applied", "ghosted", now=NOW
            )
        hooks.shutdown()

        self.assertIsNone(future)
        session_factory.assert_not_called()


if __name__ == "__main__":
    unittest.main()
