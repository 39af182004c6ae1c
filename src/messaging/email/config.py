"""Configuration for outbound email using pydantic-settings."""

from enum import StrEnum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.paths import PROJECT_ROOT

_ENV_FILE = PROJECT_ROOT / ".env"


class EmailBackend(StrEnum):
    """Email delivery backend."""

    STUB = "stub"
    SMTP = "smtp"
    RESEND = "resend"


class EmailConfig(BaseSettings):
    """Configuration for outbound email.

    All settings are loaded from environment variables with the EMAIL_ prefix.

    :param backend: Delivery backend (stub logs instead of sending).
    :param from_address: Sender email address.
    :param from_name: Sender display name.
    :param smtp_host: SMTP server host (smtp backend).
    :param smtp_port: SMTP server port (smtp backend).
    :param smtp_username: SMTP login (smtp backend).
    :param smtp_password: SMTP password (smtp backend).
    :param smtp_use_tls: Upgrade the SMTP connection with STARTTLS.
    :param resend_api_key: API key for Resend (resend backend).
    :param app_url: Base URL of the web app, used for links in emails.
    :param request_timeout: Timeout in seconds for backend requests.
    """

    model_config = SettingsConfigDict(
        env_prefix="EMAIL_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: EmailBackend = Field(
        default=EmailBackend.STUB,
        description="Delivery backend (stub, smtp or resend)",
    )
    from_address: str = Field(
        default="noreply@jobtracker.local",
        description="Sender email address",
    )
    from_name: str = Field(default="Job Tracker", description="Sender display name")
    smtp_host: str | None = Field(default=None, description="SMTP server host")
    smtp_port: int = Field(default=587, ge=1, le=65535, description="SMTP server port")
    smtp_username: str | None = Field(default=None, description="SMTP login")
    smtp_password: str | None = Field(default=None, description="SMTP password")
    smtp_use_tls: bool = Field(default=True, description="Use STARTTLS for SMTP")
    resend_api_key: str | None = Field(default=None, description="Resend API key")
    app_url: str = Field(
        default="http://localhost:5173",
        description="Base URL of the web app for links in emails",
    )
    request_timeout: float = Field(
        default=20,
        gt=0,
        description="Timeout in seconds for backend requests",
    )


@lru_cache
def get_email_settings() -> EmailConfig:
    """Get cached email settings.

    Settings are loaded once and cached for the lifetime of the process.

    :returns: Configured EmailConfig instance.
    """
    return EmailConfig()
