"""Configuration for reminder processing using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.paths import PROJECT_ROOT

_ENV_FILE = PROJECT_ROOT / ".env"


class ReminderConfig(BaseSettings):
    """Configuration for the reminder scheduler and auto-creation rules.

    All settings are loaded from environment variables with the REMINDER_ prefix.

    :param interval_seconds: Seconds between scheduled processing passes.
    :param dispatch_timeout_seconds: Maximum seconds for a single notification send.
    :param run_on_start: Run one pass immediately when the scheduler starts.
    :param scheduler_enabled: Start the in-process scheduler with the API.
    :param follow_up_days: Days after applying before the follow-up reminder.
    :param interview_lead_days: Days before the interview for the interview reminder.
    :param hook_workers: Background workers for status-change hooks.
    """

    model_config = SettingsConfigDict(
        env_prefix="REMINDER_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    interval_seconds: float = Field(
        default=300,
        gt=0,
        description="Seconds between processing passes",
    )
    dispatch_timeout_seconds: float = Field(
        default=30,
        gt=0,
        description="Maximum seconds for a single notification send",
    )
    run_on_start: bool = Field(
        default=True,
        description="Run one processing pass immediately on start",
    )
    scheduler_enabled: bool = Field(
        default=True,
        description="Start the in-process scheduler alongside the API",
    )
    follow_up_days: int = Field(
        default=7,
        ge=1,
        description="Days after applying before the follow-up reminder",
    )
    interview_lead_days: int = Field(
        default=1,
        ge=0,
        description="Days before the interview date for the interview reminder",
    )
    hook_workers: int = Field(
        default=1,
        ge=1,
        le=8,
        description="Background workers for application status-change hooks",
    )


@lru_cache
def get_reminder_settings() -> ReminderConfig:
    """Get cached reminder settings.

    Settings are loaded once and cached for the lifetime of the process.

    :returns: Configured ReminderConfig instance.
    """
    return ReminderConfig()
