"""SQLAlchemy ORM models for job application reminders."""

import uuid as uuid_module
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.database.applications.models import JobApplication, User
from src.database.core import Base, TimestampMixin
from src.enums import ReminderType

# Maximum length of reminder notes
NOTES_MAX_LENGTH = 1000


class Reminder(TimestampMixin, Base):
    """ORM model for a reminder about a job application.

    A reminder becomes due once trigger_at has passed. The scheduler sends it
    and flips sent to True (setting sent_at); sent never goes back to False.
    """

    __tablename__ = "reminders"

    id: Mapped[uuid_module.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid_module.uuid4,
    )
    user_id: Mapped[uuid_module.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    application_id: Mapped[uuid_module.UUID] = mapped_column(
        Uuid,
        ForeignKey("job_applications.id", ondelete="CASCADE"),
        nullable=False,
    )
    trigger_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    reminder_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ReminderType.FOLLOW_UP.value,
    )
    sent: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    sent_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    notes: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    owner: Mapped["User"] = relationship("User")
    application: Mapped["JobApplication"] = relationship("JobApplication")

    __table_args__ = (
        # Scheduler scan across all users
        Index("idx_reminders_trigger_sent", "trigger_at", "sent"),
        # A user's own filtered listing
        Index("idx_reminders_user_trigger_sent", "user_id", "trigger_at", "sent"),
        Index("idx_reminders_application_sent", "application_id", "sent"),
    )

    def __repr__(self) -> str:
        """Return string representation of the reminder."""
        return (
            f"<Reminder(id={self.id}, type={self.reminder_type}, "
            f"trigger_at={self.trigger_at}, sent={self.sent})>"
        )
