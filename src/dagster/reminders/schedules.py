"""Dagster schedules for processing job application reminders."""

from dagster import DefaultScheduleStatus, ScheduleDefinition
from src.dagster.reminders.jobs import process_reminders_job

# Every 5 minutes. Ships stopped: enable it only where the API's in-process
# scheduler is disabled (REMINDER_SCHEDULER_ENABLED=false).
process_reminders_schedule = ScheduleDefinition(
    job=process_reminders_job,
    cron_schedule="*/5 * * * *",
    execution_timezone="UTC",
    default_status=DefaultScheduleStatus.STOPPED,
)
