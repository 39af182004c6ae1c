"""Database models and operations for job application reminders."""

from src.database.reminders.models import NOTES_MAX_LENGTH, Reminder
from src.database.reminders.operations import (
    ReminderQuery,
    count_reminders_for_application,
    create_reminder,
    delete_reminder_for_user,
    delete_reminders_for_application,
    get_due_reminders,
    get_reminder_by_id,
    get_reminder_for_user,
    list_reminders_for_user,
    mark_reminder_sent,
    update_reminder,
)

__all__ = [
    # Models
    "NOTES_MAX_LENGTH",
    "Reminder",
    # Operations
    "ReminderQuery",
    "count_reminders_for_application",
    "create_reminder",
    "delete_reminder_for_user",
    "delete_reminders_for_application",
    "get_due_reminders",
    "get_reminder_by_id",
    "get_reminder_for_user",
    "list_reminders_for_user",
    "mark_reminder_sent",
    "update_reminder",
]
