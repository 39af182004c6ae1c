"""Database operations for job application reminders.

Every user-facing operation is scoped by user_id. The scheduler operations
(get_due_reminders, mark_reminder_sent) run across all users.
"""

from __future__ import annotations

import logging
import uuid as uuid_module
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from sqlalchemy.orm import Session, joinedload

from src.database.reminders.models import NOTES_MAX_LENGTH, Reminder
from src.enums import ReminderType
from src.reminders.exceptions import ReminderAlreadySentError, ReminderValidationError
from src.utils.dates import ensure_utc, utc_now

logger = logging.getLogger(__name__)

SortField = Literal["trigger_at", "created_at", "updated_at"]
SortOrder = Literal["asc", "desc"]

_SORT_COLUMNS = {
    "trigger_at": Reminder.trigger_at,
    "created_at": Reminder.created_at,
    "updated_at": Reminder.updated_at,
}


@dataclass(frozen=True)
class ReminderQuery:
    """Filters, sorting and pagination for listing a user's reminders."""

    application_id: uuid_module.UUID | None = None
    reminder_type: ReminderType | None = None
    sent: bool | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    sort_by: SortField = "trigger_at"
    sort_order: SortOrder = "asc"
    page: int = 1
    limit: int = 10


def _validate_trigger_at(trigger_at: datetime, now: datetime) -> datetime:
    """Check that a trigger time is strictly in the future.

    :param trigger_at: Requested trigger time.
    :param now: Current time.
    :returns: The trigger time normalised to UTC.
    :raises ReminderValidationError: If the trigger time is not in the future.
    """
    trigger_at = ensure_utc(trigger_at)
    if trigger_at <= ensure_utc(now):
        raise ReminderValidationError("Reminder date must be in the future")
    return trigger_at


def _clean_notes(notes: str) -> str:
    """Strip notes and enforce the maximum length.

    :param notes: Raw notes text.
    :returns: The stripped notes.
    :raises ReminderValidationError: If the notes are too long.
    """
    cleaned = notes.strip()
    if len(cleaned) > NOTES_MAX_LENGTH:
        raise ReminderValidationError(f"Notes cannot exceed {NOTES_MAX_LENGTH} characters")
    return cleaned


def _parse_reminder_type(reminder_type: ReminderType | str) -> str:
    try:
        return ReminderType(reminder_type).value
    except ValueError as e:
        raise ReminderValidationError(f"Invalid reminder type: {reminder_type}") from e


def create_reminder(
    session: Session,
    user_id: uuid_module.UUID,
    application_id: uuid_module.UUID,
    trigger_at: datetime,
    reminder_type: ReminderType | str = ReminderType.FOLLOW_UP,
    notes: str = "",
    now: datetime | None = None,
) -> Reminder:
    """Create a new reminder.

    :param session: Database session.
    :param user_id: ID of the owning user.
    :param application_id: ID of the job application the reminder concerns.
    :param trigger_at: When the reminder becomes due. Must be in the future.
    :param reminder_type: Reminder category.
    :param notes: Optional free-text notes.
    :param now: Current time (defaults to now).
    :returns: The created reminder.
    :raises ReminderValidationError: If the trigger time, type or notes are invalid.
    """
    if now is None:
        now = utc_now()

    reminder = Reminder(
        user_id=user_id,
        application_id=application_id,
        trigger_at=_validate_trigger_at(trigger_at, now),
        reminder_type=_parse_reminder_type(reminder_type),
        notes=_clean_notes(notes),
        sent=False,
    )
    session.add(reminder)
    session.flush()
    logger.info(
        f"Created reminder: id={reminder.id}, type={reminder.reminder_type}, "
        f"application_id={application_id}, trigger_at={reminder.trigger_at}"
    )
    return reminder


def get_reminder_by_id(
    session: Session,
    reminder_id: uuid_module.UUID,
) -> Reminder | None:
    """Get a reminder by ID, regardless of owner.

    :param session: Database session.
    :param reminder_id: Reminder ID.
    :returns: The reminder or None if not found.
    """
    return session.query(Reminder).filter(Reminder.id == reminder_id).first()


def get_reminder_for_user(
    session: Session,
    reminder_id: uuid_module.UUID,
    user_id: uuid_module.UUID,
) -> Reminder | None:
    """Get a reminder by ID, scoped to its owner.

    :param session: Database session.
    :param reminder_id: Reminder ID.
    :param user_id: ID of the user who must own the reminder.
    :returns: The reminder or None if missing or owned by someone else.
    """
    return (
        session.query(Reminder)
        .options(joinedload(Reminder.application))
        .filter(Reminder.id == reminder_id, Reminder.user_id == user_id)
        .first()
    )


def list_reminders_for_user(
    session: Session,
    user_id: uuid_module.UUID,
    query: ReminderQuery | None = None,
) -> tuple[list[Reminder], int]:
    """List a user's reminders with filtering, sorting and pagination.

    :param session: Database session.
    :param user_id: ID of the owning user.
    :param query: Filters and paging options. Defaults to the first page.
    :returns: The page of reminders and the total number of matches.
    """
    if query is None:
        query = ReminderQuery()

    base = session.query(Reminder).filter(Reminder.user_id == user_id)

    if query.application_id is not None:
        base = base.filter(Reminder.application_id == query.application_id)
    if query.reminder_type is not None:
        base = base.filter(Reminder.reminder_type == ReminderType(query.reminder_type).value)
    if query.sent is not None:
        base = base.filter(Reminder.sent.is_(query.sent))
    if query.start_date is not None:
        base = base.filter(Reminder.trigger_at >= ensure_utc(query.start_date))
    if query.end_date is not None:
        base = base.filter(Reminder.trigger_at <= ensure_utc(query.end_date))

    total = base.count()

    sort_column = _SORT_COLUMNS[query.sort_by]
    ordering = sort_column.desc() if query.sort_order == "desc" else sort_column.asc()
    reminders = (
        base.options(joinedload(Reminder.application))
        .order_by(ordering, Reminder.id)
        .offset((query.page - 1) * query.limit)
        .limit(query.limit)
        .all()
    )
    return reminders, total


def update_reminder(
    session: Session,
    reminder_id: uuid_module.UUID,
    user_id: uuid_module.UUID,
    *,
    trigger_at: datetime | None = None,
    reminder_type: ReminderType | str | None = None,
    notes: str | None = None,
    now: datetime | None = None,
) -> Reminder | None:
    """Update a user's reminder.

    Only unsent reminders can be edited.

    :param session: Database session.
    :param reminder_id: Reminder ID.
    :param user_id: ID of the user who must own the reminder.
    :param trigger_at: New trigger time. Must be in the future.
    :param reminder_type: New reminder category.
    :param notes: New notes.
    :param now: Current time (defaults to now).
    :returns: The updated reminder or None if not found for the user.
    :raises ReminderAlreadySentError: If the reminder has already been sent.
    :raises ReminderValidationError: If any new value is invalid.
    """
    if now is None:
        now = utc_now()

    reminder = get_reminder_for_user(session, reminder_id, user_id)
    if reminder is None:
        return None

    if reminder.sent:
        raise ReminderAlreadySentError(reminder_id)

    if trigger_at is not None:
        reminder.trigger_at = _validate_trigger_at(trigger_at, now)
    if reminder_type is not None:
        reminder.reminder_type = _parse_reminder_type(reminder_type)
    if notes is not None:
        reminder.notes = _clean_notes(notes)

    session.flush()
    logger.info(f"Updated reminder: id={reminder_id}")
    return reminder


def delete_reminder_for_user(
    session: Session,
    reminder_id: uuid_module.UUID,
    user_id: uuid_module.UUID,
) -> bool:
    """Delete a user's reminder.

    :param session: Database session.
    :param reminder_id: Reminder ID.
    :param user_id: ID of the user who must own the reminder.
    :returns: True if a reminder was deleted.
    """
    reminder = get_reminder_for_user(session, reminder_id, user_id)
    if reminder is None:
        return False

    session.delete(reminder)
    session.flush()
    logger.info(f"Deleted reminder: id={reminder_id}")
    return True


def get_due_reminders(
    session: Session,
    now: datetime | None = None,
) -> list[Reminder]:
    """Get all unsent reminders whose trigger time has passed, for every user.

    The owner and application are loaded with the reminder so the results
    can be dispatched after the session closes.

    :param session: Database session.
    :param now: Current time (defaults to now).
    :returns: Due reminders ordered by trigger time.
    """
    if now is None:
        now = utc_now()

    return (
        session.query(Reminder)
        .options(joinedload(Reminder.owner), joinedload(Reminder.application))
        .filter(
            Reminder.trigger_at <= now,
            Reminder.sent.is_(False),
        )
        .order_by(Reminder.trigger_at, Reminder.id)
        .all()
    )


def mark_reminder_sent(
    session: Session,
    reminder_id: uuid_module.UUID,
    now: datetime | None = None,
) -> bool:
    """Mark a reminder as sent.

    Idempotent: the update only matches unsent rows, so calling it again
    leaves sent_at as set by the first call.

    :param session: Database session.
    :param reminder_id: Reminder ID.
    :param now: Current time (defaults to now).
    :returns: True if the reminder changed from unsent to sent.
    """
    if now is None:
        now = utc_now()

    updated = (
        session.query(Reminder)
        .filter(Reminder.id == reminder_id, Reminder.sent.is_(False))
        .update(
            {Reminder.sent: True, Reminder.sent_at: now, Reminder.updated_at: now},
            synchronize_session=False,
        )
    )

    if updated:
        logger.info(f"Marked reminder sent: id={reminder_id}")
    else:
        logger.debug(f"Reminder already sent or missing: id={reminder_id}")
    return bool(updated)


def count_reminders_for_application(
    session: Session,
    user_id: uuid_module.UUID,
    application_id: uuid_module.UUID,
) -> int:
    """Count a user's reminders for one job application.

    :param session: Database session.
    :param user_id: ID of the owning user.
    :param application_id: Application ID.
    :returns: Number of reminders.
    """
    return (
        session.query(Reminder)
        .filter(
            Reminder.user_id == user_id,
            Reminder.application_id == application_id,
        )
        .count()
    )


def delete_reminders_for_application(
    session: Session,
    application_id: uuid_module.UUID,
) -> int:
    """Delete every reminder attached to a job application.

    Called after the application itself has been deleted.

    :param session: Database session.
    :param application_id: Application ID.
    :returns: Number of reminders deleted.
    """
    deleted = (
        session.query(Reminder)
        .filter(Reminder.application_id == application_id)
        .delete(synchronize_session=False)
    )
    logger.info(f"Deleted reminders for application: application_id={application_id}, count={deleted}")
    return deleted
