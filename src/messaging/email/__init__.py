"""Email delivery for reminder notifications."""

from src.messaging.email.client import EmailClient, build_transport
from src.messaging.email.config import EmailBackend, EmailConfig, get_email_settings
from src.messaging.email.exceptions import EmailClientError
from src.messaging.email.models import EmailMessage, SendEmailResult
from src.messaging.email.notifier import EmailNotifier
from src.messaging.email.transports import (
    EmailTransport,
    ResendTransport,
    SmtpTransport,
    StubTransport,
)

__all__ = [
    "EmailBackend",
    "EmailClient",
    "EmailClientError",
    "EmailConfig",
    "EmailMessage",
    "EmailNotifier",
    "EmailTransport",
    "ResendTransport",
    "SendEmailResult",
    "SmtpTransport",
    "StubTransport",
    "build_transport",
    "get_email_settings",
]
