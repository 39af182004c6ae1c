"""SQLAlchemy ORM models for the users and job applications reminders refer to.

Only the columns the reminder subsystem reads are mapped here; the wider
account and application records are owned by other services.
"""

import uuid as uuid_module
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.database.core import Base, TimestampMixin
from src.enums import ApplicationStatus


class User(TimestampMixin, Base):
    """ORM model for a reminder owner."""

    __tablename__ = "users"

    id: Mapped[uuid_module.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid_module.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )
    first_name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )
    last_name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    @property
    def display_name(self) -> str:
        """Name used to greet the user in notifications."""
        return self.first_name or "there"

    def __repr__(self) -> str:
        """Return string representation of the user."""
        return f"<User(id={self.id}, email={self.email!r})>"


class JobApplication(TimestampMixin, Base):
    """ORM model for a job application (the subject of a reminder)."""

    __tablename__ = "job_applications"

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
    company: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    job_title: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ApplicationStatus.SAVED.value,
    )
    # Reference date for interview reminders
    date_applied: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    owner: Mapped["User"] = relationship("User")

    __table_args__ = (Index("idx_job_applications_user_id", "user_id"),)

    def __repr__(self) -> str:
        """Return string representation of the application."""
        return (
            f"<JobApplication(id={self.id}, company={self.company!r}, status={self.status})>"
        )
