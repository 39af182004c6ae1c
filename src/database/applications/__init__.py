"""Database models and operations for reminder owners and job applications."""

from src.database.applications.models import JobApplication, User
from src.database.applications.operations import (
    get_application_by_id,
    get_application_for_user,
)

__all__ = [
    # Models
    "JobApplication",
    "User",
    # Operations
    "get_application_by_id",
    "get_application_for_user",
]
