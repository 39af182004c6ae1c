"""Database operations for job applications used by the reminder subsystem."""

from __future__ import annotations

import uuid as uuid_module

from sqlalchemy.orm import Session

from src.database.applications.models import JobApplication


def get_application_by_id(
    session: Session,
    application_id: uuid_module.UUID,
) -> JobApplication | None:
    """Get a job application by ID, regardless of owner.

    :param session: Database session.
    :param application_id: Application ID.
    :returns: The application or None if not found.
    """
    return session.query(JobApplication).filter(JobApplication.id == application_id).first()


def get_application_for_user(
    session: Session,
    application_id: uuid_module.UUID,
    user_id: uuid_module.UUID,
) -> JobApplication | None:
    """Get a job application by ID, scoped to its owner.

    :param session: Database session.
    :param application_id: Application ID.
    :param user_id: ID of the user who must own the application.
    :returns: The application or None if missing or owned by someone else.
    """
    return (
        session.query(JobApplication)
        .filter(
            JobApplication.id == application_id,
            JobApplication.user_id == user_id,
        )
        .first()
    )
