"""Dagster jobs for processing job application reminders."""

from dagster import job
from src.dagster.reminders.ops import process_reminders_op


@job(
    name="process_reminders_job",
    description="Send due job application reminders (every 5 minutes when enabled).",
)
def process_reminders_job() -> None:
    """Process reminders job.

    Sends every due, unsent reminder and marks the delivered ones as sent.
    """
    process_reminders_op()
