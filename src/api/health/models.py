"""Pydantic models for health check endpoints."""

from typing import Literal

from pydantic import BaseModel, Field


class SchedulerHealth(BaseModel):
    """State of the in-process reminder scheduler."""

    state: Literal["running", "stopped", "disabled"] = Field(
        ...,
        description="Whether the scheduler timer is active",
    )
    processing: bool = Field(False, description="Whether a processing pass is in progress")


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(..., description="Service health status")
    version: str = Field(..., description="Application version")
    scheduler: SchedulerHealth = Field(..., description="Reminder scheduler state")
