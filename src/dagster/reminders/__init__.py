"""Dagster jobs and schedules for job application reminders."""

from src.dagster.reminders.definitions import defs
from src.dagster.reminders.jobs import process_reminders_job
from src.dagster.reminders.ops import process_reminders_op
from src.dagster.reminders.schedules import process_reminders_schedule

__all__ = [
    "defs",
    "process_reminders_job",
    "process_reminders_op",
    "process_reminders_schedule",
]
