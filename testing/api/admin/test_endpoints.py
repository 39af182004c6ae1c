"""Tests for admin API endpoints."""

import os

# Set required environment variables before importing API modules
os.environ.setdefault("API_AUTH_TOKEN", "test-auth-token")
os.environ.setdefault("REMINDER_SCHEDULER_ENABLED", "false")

import unittest
from datetime import UTC, datetime
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from src.api.app import app
from src.reminders.processor import ProcessingStats

STARTED_AT = datetime(2026, 3, 2, 12, 0, 0, tzinfo=UTC)


class TestProcessRemindersEndpoint(unittest.TestCase):
    """Tests for POST /admin/reminders/process endpoint."""

    def setUp(self) -> None:
        """Set up test client."""
        self.client = TestClient(app)
        self.auth_headers = {"Authorization": "Bearer test-auth-token"}

    @patch("src.api.admin.endpoints.get_reminder_processor")
    def test_runs_a_pass_and_returns_stats(self, mock_get_processor: MagicMock) -> None:
        """Test the manual trigger returns the pass stats."""
        mock_get_processor.return_value.trigger_now.return_value = ProcessingStats(
            started_at=STARTED_AT,
            due=3,
            sent=2,
            failed=1,
            errors=["Failed to send reminder x: SMTP down"],
        )

        response = self.client.post("/admin/reminders/process", headers=self.auth_headers)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual((data["due"], data["sent"], data["failed"]), (3, 2, 1))
        self.assertFalse(data["skipped"])
        self.assertEqual(data["errors"], ["Failed to send reminder x: SMTP down"])
        mock_get_processor.return_value.trigger_now.assert_called_once_with()

    @patch("src.api.admin.endpoints.get_reminder_processor")
    def test_reports_skipped_pass(self, mock_get_processor: MagicMock) -> None:
        """Test a trigger during a running pass reports skipped."""
        mock_get_processor.return_value.trigger_now.return_value = ProcessingStats(
            started_at=STARTED_AT,
            skipped=True,
        )

        response = self.client.post("/admin/reminders/process", headers=self.auth_headers)

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["skipped"])

    def test_requires_authentication(self) -> None:
        """Test the endpoint is protected by the bearer token."""
        response = self.client.post("/admin/reminders/process")

        self.assertIn(response.status_code, (401, 403))


if __name__ == "__main__":
    unittest.main()
