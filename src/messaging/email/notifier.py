"""Reminder notifications delivered by email."""

import logging

from src.database.applications import JobApplication, User
from src.enums import ReminderType
from src.messaging.email.client import EmailClient
from src.messaging.email.templates import (
    application_url,
    render_generic_reminder,
    render_interview_reminder,
)

logger = logging.getLogger(__name__)


class EmailNotifier:
    """Sends reminder notifications to application owners by email.

    Both send methods raise EmailClientError when delivery fails.
    """

    def __init__(self, client: EmailClient) -> None:
        """Initialise the notifier.

        :param client: Email client used for delivery.
        """
        self._client = client

    def send_interview_reminder(self, owner: User, application: JobApplication) -> None:
        """Email the owner about an upcoming interview.

        :param owner: The application's owner.
        :param application: The application with the interview.
        """
        message = render_interview_reminder(
            to=owner.email,
            greeting_name=owner.display_name,
            company=application.company,
            job_title=application.job_title,
            interview_date=application.date_applied,
            link=application_url(self._client.app_url, application.id),
        )
        result = self._client.send(message)
        logger.info(
            f"Interview reminder emailed: application_id={application.id}, "
            f"message_id={result.message_id}"
        )

    def send_generic_reminder(
        self,
        owner: User,
        application: JobApplication,
        reminder_type: ReminderType,
    ) -> None:
        """Email the owner a follow-up, deadline or response-check reminder.

        :param owner: The application's owner.
        :param application: The application the reminder concerns.
        :param reminder_type: The reminder type.
        """
        message = render_generic_reminder(
            to=owner.email,
            greeting_name=owner.display_name,
            company=application.company,
            job_title=application.job_title,
            status=application.status,
            reminder_type=reminder_type,
            link=application_url(self._client.app_url, application.id),
        )
        result = self._client.send(message)
        logger.info(
            f"{reminder_type} reminder emailed: application_id={application.id}, "
            f"message_id={result.message_id}"
        )
