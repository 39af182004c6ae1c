"""Pydantic models for admin API endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class ProcessRemindersResponse(BaseModel):
    """Response model for a manually triggered processing pass."""

    started_at: datetime = Field(..., description="When the pass started")
    skipped: bool = Field(..., description="True if another pass was already running")
    aborted: bool = Field(..., description="True if the due set could not be loaded")
    due: int = Field(..., description="Number of due reminders found")
    sent: int = Field(..., description="Number of reminders sent and marked")
    failed: int = Field(..., description="Number of reminders that failed")
    errors: list[str] = Field(default_factory=list, description="Error messages")
