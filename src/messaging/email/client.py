"""Email client that sends rendered messages through the configured backend."""

import logging

from src.messaging.email.config import EmailBackend, EmailConfig
from src.messaging.email.models import EmailMessage, SendEmailResult
from src.messaging.email.transports import (
    EmailTransport,
    ResendTransport,
    SmtpTransport,
    StubTransport,
)

logger = logging.getLogger(__name__)


def build_transport(config: EmailConfig) -> EmailTransport:
    """Create the transport for the configured backend.

    :param config: Email settings.
    :returns: The transport instance.
    :raises ValueError: If the selected backend is missing required settings.
    """
    if config.backend == EmailBackend.SMTP:
        if not config.smtp_host or not config.smtp_username or not config.smtp_password:
            raise ValueError(
                "SMTP configuration incomplete. Set EMAIL_SMTP_HOST, EMAIL_SMTP_USERNAME "
                "and EMAIL_SMTP_PASSWORD environment variables."
            )
        return SmtpTransport(
            host=config.smtp_host,
            port=config.smtp_port,
            username=config.smtp_username,
            password=config.smtp_password,
            use_tls=config.smtp_use_tls,
            timeout=config.request_timeout,
        )

    if config.backend == EmailBackend.RESEND:
        if not config.resend_api_key or not config.resend_api_key.strip():
            raise ValueError(
                "Resend API key not configured. Set EMAIL_RESEND_API_KEY environment variable."
            )
        return ResendTransport(api_key=config.resend_api_key, timeout=config.request_timeout)

    return StubTransport()


class EmailClient:
    """Sends emails from the configured sender address."""

    def __init__(self, config: EmailConfig, transport: EmailTransport | None = None) -> None:
        """Initialise the email client.

        :param config: Email settings.
        :param transport: Delivery backend. Built from the settings if not provided.
        :raises ValueError: If the configured backend is missing required settings.
        """
        self._config = config
        self._transport = transport or build_transport(config)
        logger.debug(f"EmailClient initialised with backend={self._transport.name}")

    @property
    def app_url(self) -> str:
        """Base URL of the web app, for links in emails."""
        return self._config.app_url.rstrip("/")

    @property
    def sender(self) -> str:
        """Formatted From header."""
        return f'"{self._config.from_name}" <{self._config.from_address}>'

    def send(self, message: EmailMessage) -> SendEmailResult:
        """Send a message.

        :param message: The rendered message.
        :returns: Result with the backend's message ID.
        :raises EmailClientError: If delivery fails.
        """
        return self._transport.send(message, self.sender)
