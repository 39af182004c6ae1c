"""Rules for creating reminders automatically when an application changes status.

evaluate_status_change is pure: it only decides which reminders to create.
apply_status_change persists those decisions.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from src.database.reminders import Reminder, create_reminder
from src.enums import ApplicationStatus, ReminderType
from src.reminders.config import ReminderConfig, get_reminder_settings
from src.utils.dates import ensure_utc, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReminderDraft:
    """A reminder the rules decided to create."""

    reminder_type: ReminderType
    trigger_at: datetime
    notes: str


@dataclass(frozen=True)
class StatusChange:
    """Snapshot of an application status transition.

    Holds plain values so it can be handed to a background worker without
    carrying a database session along.
    """

    user_id: uuid.UUID
    application_id: uuid.UUID
    company: str
    reference_date: datetime | None
    old_status: ApplicationStatus
    new_status: ApplicationStatus
    occurred_at: datetime


def evaluate_status_change(
    old_status: ApplicationStatus | str,
    new_status: ApplicationStatus | str,
    *,
    company: str,
    reference_date: datetime | None,
    now: datetime,
    config: ReminderConfig | None = None,
) -> list[ReminderDraft]:
    """Decide which reminders a status transition should create.

    Both rules are evaluated independently:
    - Moving to INTERVIEW with a known date creates an interview reminder the
      configured number of days before it, unless that time has already passed.
    - Moving to APPLIED from any other status creates a follow-up reminder the
      configured number of days from now.

    :param old_status: Status before the change.
    :param new_status: Status after the change.
    :param company: Company name, used in the reminder notes.
    :param reference_date: The application's reference (interview) date, if known.
    :param now: Evaluation time.
    :param config: Reminder settings. Defaults to the environment settings.
    :returns: Zero, one or two reminder drafts.
    """
    old_status = ApplicationStatus(old_status)
    new_status = ApplicationStatus(new_status)
    if old_status == new_status:
        return []

    if config is None:
        config = get_reminder_settings()
    now = ensure_utc(now)
    drafts: list[ReminderDraft] = []

    if new_status == ApplicationStatus.INTERVIEW and reference_date is not None:
        trigger_at = ensure_utc(reference_date) - timedelta(days=config.interview_lead_days)
        if trigger_at > now:
            drafts.append(
                ReminderDraft(
                    reminder_type=ReminderType.INTERVIEW,
                    trigger_at=trigger_at,
                    notes=f"Auto-created reminder for interview at {company}",
                )
            )
        else:
            logger.debug(
                f"Skipping interview reminder: trigger_at={trigger_at} is not in the future"
            )

    if new_status == ApplicationStatus.APPLIED and old_status != ApplicationStatus.APPLIED:
        drafts.append(
            ReminderDraft(
                reminder_type=ReminderType.FOLLOW_UP,
                trigger_at=now + timedelta(days=config.follow_up_days),
                notes=f"Auto-created follow-up reminder for application at {company}",
            )
        )

    return drafts


def apply_status_change(
    session: Session,
    change: StatusChange,
    config: ReminderConfig | None = None,
) -> list[Reminder]:
    """Create the reminders a status transition calls for.

    :param session: Database session.
    :param change: The status transition.
    :param config: Reminder settings. Defaults to the environment settings.
    :returns: The reminders created (possibly none).
    """
    drafts = evaluate_status_change(
        change.old_status,
        change.new_status,
        company=change.company,
        reference_date=change.reference_date,
        now=change.occurred_at,
        config=config,
    )

    reminders = [
        create_reminder(
            session=session,
            user_id=change.user_id,
            application_id=change.application_id,
            trigger_at=draft.trigger_at,
            reminder_type=draft.reminder_type,
            notes=draft.notes,
            now=change.occurred_at,
        )
        for draft in drafts
    ]

    if reminders:
        logger.info(
            f"Auto-created {len(reminders)} reminder(s): application_id={change.application_id}, "
            f"{change.old_status} -> {change.new_status}"
        )
    return reminders


def build_status_change(
    user_id: uuid.UUID,
    application_id: uuid.UUID,
    company: str,
    reference_date: datetime | None,
    old_status: ApplicationStatus | str,
    new_status: ApplicationStatus | str,
    now: datetime | None = None,
) -> StatusChange:
    """Build a StatusChange, stamping it with the current time by default."""
    return StatusChange(
        user_id=user_id,
        application_id=application_id,
        company=company,
        reference_date=reference_date,
        old_status=ApplicationStatus(old_status),
        new_status=ApplicationStatus(new_status),
        occurred_at=now or utc_now(),
    )
