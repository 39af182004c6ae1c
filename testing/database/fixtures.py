"""Shared fixtures for tests that need a real database session.

Uses an in-memory SQLite database shared across threads, so code that opens
its own sessions (the processor, background hooks) sees the same data.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from src.database.applications import JobApplication, User
from src.database.core import Base
from src.database.reminders import Reminder
from src.enums import ApplicationStatus, ReminderType

# Fixed clock used across tests
NOW = datetime(2026, 3, 2, 12, 0, 0, tzinfo=UTC)


def _enable_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class SqliteDatabase:
    """An in-memory database with a get_session-compatible factory."""

    def __init__(self) -> None:
        self.engine: Engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        event.listen(self.engine, "connect", _enable_foreign_keys)
        Base.metadata.create_all(self.engine)
        self._factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Open a session that commits on success and rolls back on error."""
        session = self._factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        """Drop all tables and release the engine."""
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def add_user(self, email: str = "ada@example.com", first_name: str | None = "Ada") -> User:
        """Insert a user."""
        with self.session() as session:
            user = User(email=email, first_name=first_name)
            session.add(user)
        return user

    def add_application(
        self,
        user: User,
        company: str = "Acme",
        job_title: str = "Engineer",
        status: ApplicationStatus = ApplicationStatus.APPLIED,
        date_applied: datetime | None = None,
    ) -> JobApplication:
        """Insert a job application for a user."""
        with self.session() as session:
            application = JobApplication(
                user_id=user.id,
                company=company,
                job_title=job_title,
                status=status.value,
                date_applied=date_applied,
            )
            session.add(application)
        return application

    def add_reminder(
        self,
        application: JobApplication,
        trigger_at: datetime,
        reminder_type: ReminderType = ReminderType.FOLLOW_UP,
        sent: bool = False,
        notes: str = "",
    ) -> Reminder:
        """Insert a reminder directly, bypassing the future-date validation."""
        with self.session() as session:
            reminder = Reminder(
                user_id=application.user_id,
                application_id=application.id,
                trigger_at=trigger_at,
                reminder_type=reminder_type.value,
                sent=sent,
                sent_at=trigger_at + timedelta(minutes=1) if sent else None,
                notes=notes,
            )
            session.add(reminder)
        return reminder

    def get_reminder(self, reminder_id: Any) -> Reminder | None:
        """Load a reminder in a fresh session."""
        with self.session() as session:
            return session.get(Reminder, reminder_id)

    def all_reminders(self) -> list[Reminder]:
        """Load every reminder in a fresh session."""
        with self.session() as session:
            return session.query(Reminder).order_by(Reminder.trigger_at).all()
