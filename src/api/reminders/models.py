"""Pydantic models for reminders API endpoints."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from src.database.reminders.models import NOTES_MAX_LENGTH
from src.enums import ReminderType


class ReminderResponse(BaseModel):
    """Response model for reminders."""

    id: UUID = Field(..., description="Reminder ID")
    application_id: UUID = Field(..., description="Job application ID")
    company: str | None = Field(None, description="Company of the job application")
    job_title: str | None = Field(None, description="Position of the job application")
    trigger_at: datetime = Field(..., description="When the reminder becomes due")
    reminder_type: ReminderType = Field(..., description="Reminder category")
    notes: str = Field("", description="Free-text notes")
    sent: bool = Field(..., description="Whether the notification has been sent")
    sent_at: datetime | None = Field(None, description="When the notification was sent")
    created_at: datetime = Field(..., description="When the reminder was created")
    updated_at: datetime = Field(..., description="When the reminder was last updated")


class CreateReminderRequest(BaseModel):
    """Request model for creating a reminder."""

    application_id: UUID = Field(..., description="Job application the reminder concerns")
    trigger_at: datetime = Field(
        ...,
        description="When to send the reminder (ISO format with timezone, must be in the future)",
    )
    reminder_type: ReminderType = Field(
        ReminderType.FOLLOW_UP,
        description="Reminder category",
    )
    notes: str = Field("", max_length=NOTES_MAX_LENGTH, description="Optional notes")


class UpdateReminderRequest(BaseModel):
    """Request model for updating a reminder."""

    trigger_at: datetime | None = Field(
        None,
        description="New trigger time (ISO format with timezone, must be in the future)",
    )
    reminder_type: ReminderType | None = Field(None, description="New reminder category")
    notes: str | None = Field(None, max_length=NOTES_MAX_LENGTH, description="New notes")


class QueryRemindersRequest(BaseModel):
    """Request model for querying reminders."""

    application_id: UUID | None = Field(None, description="Only reminders for this application")
    reminder_type: ReminderType | None = Field(None, description="Only reminders of this type")
    sent: bool | None = Field(None, description="Filter by sent state")
    start_date: datetime | None = Field(None, description="Earliest trigger time (inclusive)")
    end_date: datetime | None = Field(None, description="Latest trigger time (inclusive)")
    sort_by: Literal["trigger_at", "created_at", "updated_at"] = Field(
        "trigger_at",
        description="Field to sort by",
    )
    sort_order: Literal["asc", "desc"] = Field("asc", description="Sort direction")
    page: int = Field(1, ge=1, description="Page number (1-based)")
    limit: int = Field(10, ge=1, le=100, description="Reminders per page")


class PaginationResponse(BaseModel):
    """Pagination details for list responses."""

    page: int = Field(..., description="Current page")
    limit: int = Field(..., description="Page size")
    total: int = Field(..., description="Total matching items")
    pages: int = Field(..., description="Total number of pages")


class QueryRemindersResponse(BaseModel):
    """Response model for querying reminders."""

    results: list[ReminderResponse] = Field(
        default_factory=list,
        description="Page of reminders",
    )
    pagination: PaginationResponse = Field(..., description="Pagination details")
