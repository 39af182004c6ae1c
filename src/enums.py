"""Central enum definitions for the project."""

from enum import StrEnum


class ApplicationStatus(StrEnum):
    """Lifecycle status of a job application.

    Saved -> Applied -> Interview -> Offer -> Rejected, in any order.
    """

    SAVED = "saved"
    APPLIED = "applied"
    INTERVIEW = "interview"
    OFFER = "offer"
    REJECTED = "rejected"


class ReminderType(StrEnum):
    """Category of a reminder, used to pick the notification template."""

    FOLLOW_UP = "follow-up"
    INTERVIEW = "interview"
    DEADLINE = "deadline"
    RESPONSE = "response"
