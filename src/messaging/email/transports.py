"""Email delivery backends.

Each transport hands one message to its backend and raises EmailClientError
on any delivery failure.
"""

import logging
import smtplib
import ssl
import uuid
from abc import ABC, abstractmethod
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import requests

from src.messaging.email.exceptions import EmailClientError
from src.messaging.email.models import EmailMessage, SendEmailResult

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class EmailTransport(ABC):
    """Abstract base class for email delivery backends."""

    name: str

    @abstractmethod
    def send(self, message: EmailMessage, sender: str) -> SendEmailResult:
        """Deliver a message.

        :param message: The rendered message.
        :param sender: Formatted From header.
        :returns: Result with the backend's message ID.
        :raises EmailClientError: If delivery fails.
        """
        ...


class StubTransport(EmailTransport):
    """Logs messages instead of sending them."""

    name = "stub"

    def send(self, message: EmailMessage, sender: str) -> SendEmailResult:
        """Log the message and return a synthetic message ID."""
        message_id = f"stub-{uuid.uuid4()}"
        logger.info(
            f"[STUB EMAIL] to={message.to}, subject={message.subject!r}, "
            f"from={sender}, html_length={len(message.html)}"
        )
        return SendEmailResult(message_id=message_id, backend=self.name)


class SmtpTransport(EmailTransport):
    """Sends messages over SMTP, upgrading with STARTTLS when enabled."""

    name = "smtp"

    def __init__(
        self,
        *,
        host: str,
        port: int,
        username: str,
        password: str,
        use_tls: bool = True,
        timeout: float = 20,
    ) -> None:
        """Initialise the SMTP transport.

        :param host: SMTP server host.
        :param port: SMTP server port.
        :param username: SMTP login.
        :param password: SMTP password.
        :param use_tls: Upgrade the connection with STARTTLS.
        :param timeout: Socket timeout in seconds.
        """
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    def send(self, message: EmailMessage, sender: str) -> SendEmailResult:
        """Send the message as a multipart (plain text + HTML) email."""
        mime = MIMEMultipart("alternative")
        mime["Subject"] = message.subject
        mime["From"] = sender
        mime["To"] = message.to
        mime.attach(MIMEText(message.text, "plain"))
        mime.attach(MIMEText(message.html, "html"))

        logger.info(f"Sending email via SMTP: host={self._host}:{self._port}, to={message.to}")
        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
                if self._use_tls:
                    server.starttls(context=ssl.create_default_context())
                server.login(self._username, self._password)
                server.sendmail(self._username, [message.to], mime.as_string())
        except (smtplib.SMTPException, OSError) as e:
            raise EmailClientError(f"SMTP delivery failed: {e}") from e

        message_id = f"smtp-{uuid.uuid4()}"
        logger.info(f"Email sent via SMTP: to={message.to}")
        return SendEmailResult(message_id=message_id, backend=self.name)


class ResendTransport(EmailTransport):
    """Sends messages through the Resend HTTP API."""

    name = "resend"

    def __init__(self, *, api_key: str, timeout: float = 20) -> None:
        """Initialise the Resend transport.

        :param api_key: Resend API key.
        :param timeout: Request timeout in seconds.
        """
        self._api_key = api_key
        self._timeout = timeout

    def send(self, message: EmailMessage, sender: str) -> SendEmailResult:
        """POST the message to the Resend API."""
        payload = {
            "from": sender,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
            "text": message.text,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}

        logger.info(f"Sending email via Resend: to={message.to}")
        try:
            response = requests.post(
                RESEND_API_URL,
                json=payload,
                headers=headers,
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise EmailClientError(f"Resend request timed out after {self._timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise EmailClientError(f"Resend request failed: {e}") from e

        message_id = response.json().get("id")
        if not message_id:
            raise EmailClientError("Resend response did not include a message ID")

        logger.info(f"Email sent via Resend: message_id={message_id}, to={message.to}")
        return SendEmailResult(message_id=message_id, backend=self.name)
