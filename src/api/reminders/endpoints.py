"""API endpoints for managing a user's job application reminders."""

import logging
import math
import time
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_current_user_id
from src.api.reminders.models import (
    CreateReminderRequest,
    PaginationResponse,
    QueryRemindersRequest,
    QueryRemindersResponse,
    ReminderResponse,
    UpdateReminderRequest,
)
from src.database.applications import get_application_for_user
from src.database.connection import get_session
from src.database.reminders import (
    Reminder,
    ReminderQuery,
    create_reminder,
    delete_reminder_for_user,
    get_reminder_for_user,
    list_reminders_for_user,
    update_reminder,
)
from src.reminders.exceptions import ReminderAlreadySentError, ReminderValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reminders", tags=["Reminders"])


def _reminder_to_response(reminder: Reminder) -> ReminderResponse:
    """Convert a reminder model to response.

    :param reminder: The database model.
    :returns: API response model.
    """
    application = reminder.application
    return ReminderResponse(
        id=reminder.id,
        application_id=reminder.application_id,
        company=application.company if application is not None else None,
        job_title=application.job_title if application is not None else None,
        trigger_at=reminder.trigger_at,
        reminder_type=reminder.reminder_type,
        notes=reminder.notes,
        sent=reminder.sent,
        sent_at=reminder.sent_at,
        created_at=reminder.created_at,
        updated_at=reminder.updated_at,
    )


def _not_found(reminder_id: UUID) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Reminder not found: {reminder_id}",
    )


@router.post(
    "",
    response_model=ReminderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create reminder",
)
def create_reminder_endpoint(
    request: CreateReminderRequest,
    user_id: UUID = Depends(get_current_user_id),
) -> ReminderResponse:
    """Create a reminder for one of the user's job applications."""
    start = time.perf_counter()
    logger.info(
        f"Create reminder: application_id={request.application_id}, "
        f"type={request.reminder_type}, trigger_at={request.trigger_at}"
    )

    with get_session() as session:
        application = get_application_for_user(session, request.application_id, user_id)
        if application is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Job application not found: {request.application_id}",
            )

        try:
            reminder = create_reminder(
                session=session,
                user_id=user_id,
                application_id=application.id,
                trigger_at=request.trigger_at,
                reminder_type=request.reminder_type,
                notes=request.notes,
            )
        except ReminderValidationError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

        reminder.application = application
        response = _reminder_to_response(reminder)

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"Create reminder complete: id={response.id}, elapsed={elapsed_ms:.0f}ms")

    return response


@router.post(
    "/query",
    response_model=QueryRemindersResponse,
    summary="Query reminders",
)
def query_reminders(
    request: QueryRemindersRequest,
    user_id: UUID = Depends(get_current_user_id),
) -> QueryRemindersResponse:
    """Query the user's reminders with filters, sorting and pagination."""
    start = time.perf_counter()
    logger.info(
        f"Query reminders: user_id={user_id}, page={request.page}, limit={request.limit}, "
        f"sent={request.sent}, type={request.reminder_type}"
    )

    query = ReminderQuery(**request.model_dump())
    with get_session() as session:
        reminders, total = list_reminders_for_user(session, user_id, query)
        results = [_reminder_to_response(r) for r in reminders]

    pagination = PaginationResponse(
        page=request.page,
        limit=request.limit,
        total=total,
        pages=math.ceil(total / request.limit),
    )

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"Query reminders complete: found={len(results)}, total={total}, "
        f"elapsed={elapsed_ms:.0f}ms"
    )

    return QueryRemindersResponse(results=results, pagination=pagination)


@router.get(
    "/{reminder_id}",
    response_model=ReminderResponse,
    summary="Get reminder",
)
def get_reminder(
    reminder_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
) -> ReminderResponse:
    """Get one of the user's reminders by ID."""
    logger.info(f"Get reminder: id={reminder_id}")

    with get_session() as session:
        reminder = get_reminder_for_user(session, reminder_id, user_id)
        if reminder is None:
            raise _not_found(reminder_id)
        return _reminder_to_response(reminder)


@router.patch(
    "/{reminder_id}",
    response_model=ReminderResponse,
    summary="Update reminder",
)
def update_reminder_endpoint(
    reminder_id: UUID,
    request: UpdateReminderRequest,
    user_id: UUID = Depends(get_current_user_id),
) -> ReminderResponse:
    """Update an unsent reminder.

    Only provided fields are changed. Reminders that have already been sent
    cannot be edited.
    """
    start = time.perf_counter()
    changes = request.model_dump(exclude_none=True)
    if not changes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update",
        )

    logger.info(f"Update reminder: id={reminder_id}, fields={sorted(changes)}")

    with get_session() as session:
        try:
            reminder = update_reminder(session, reminder_id, user_id, **changes)
        except ReminderAlreadySentError as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
        except ReminderValidationError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

        if reminder is None:
            raise _not_found(reminder_id)
        response = _reminder_to_response(reminder)

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"Update reminder complete: id={reminder_id}, elapsed={elapsed_ms:.0f}ms")

    return response


@router.delete(
    "/{reminder_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete reminder",
)
def delete_reminder(
    reminder_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
) -> None:
    """Delete one of the user's reminders."""
    logger.info(f"Delete reminder: id={reminder_id}")

    with get_session() as session:
        if not delete_reminder_for_user(session, reminder_id, user_id):
            raise _not_found(reminder_id)
