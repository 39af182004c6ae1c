"""Email templates for reminder notifications.

Each render function returns a complete EmailMessage with HTML and plain
text bodies. Values from the database are HTML-escaped in the HTML body.
"""

from dataclasses import dataclass
from datetime import datetime
from html import escape

from src.enums import ReminderType
from src.messaging.email.models import EmailMessage

BRAND_NAME = "Job Tracker"

_BASE_HTML = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
</head>
<body style="margin: 0; padding: 0; font-family: Arial, sans-serif; background-color: #f4f4f4;">
  <div style="max-width: 600px; margin: 20px auto; background-color: #ffffff; border-radius: 8px;">
    <div style="padding: 32px 40px 16px; text-align: center; background-color: #667eea; border-radius: 8px 8px 0 0;">
      <h1 style="margin: 0; color: #ffffff; font-size: 26px;">{brand}</h1>
    </div>
    <div style="padding: 32px 40px; color: #495057; font-size: 16px; line-height: 1.6;">
      {content}
    </div>
    <div style="padding: 16px 40px; text-align: center; background-color: #f8f9fa; color: #6c757d; font-size: 12px;">
      This is an automated email from {brand}.
    </div>
  </div>
</body>
</html>
"""

_DETAILS_HTML = """\
<div style="margin: 24px 0; padding: 16px 20px; background-color: #f8f9fa; border-left: 4px solid #667eea;">
  <h3 style="margin: 0 0 12px; color: #212529; font-size: 18px;">{heading}</h3>
  {rows}
</div>
"""

_BUTTON_HTML = """\
<div style="text-align: center; margin: 24px 0;">
  <a href="{url}" style="display: inline-block; padding: 12px 28px; background-color: #667eea; color: #ffffff; text-decoration: none; border-radius: 6px; font-weight: 600;">{label}</a>
</div>
"""


@dataclass(frozen=True)
class _GenericCopy:
    """Wording for a non-interview reminder type."""

    subject: str
    title: str
    message: str
    action: str


_GENERIC_COPY = {
    ReminderType.FOLLOW_UP: _GenericCopy(
        subject="Follow-up Reminder",
        title="Follow-up Reminder",
        message="This is a reminder to follow up on your job application.",
        action="Follow up on your application",
    ),
    ReminderType.DEADLINE: _GenericCopy(
        subject="Deadline Reminder",
        title="Application Deadline Reminder",
        message="This is a reminder about an upcoming application deadline.",
        action="Check application deadline",
    ),
    ReminderType.RESPONSE: _GenericCopy(
        subject="Response Check",
        title="Response Check Reminder",
        message="This is a reminder to check for responses to your application.",
        action="Check for responses",
    ),
}


def _format_date(value: datetime | None) -> str:
    if value is None:
        return "soon"
    return f"{value:%A, %B} {value.day}, {value.year}"


def _details_html(heading: str, rows: list[tuple[str, str]]) -> str:
    rendered = "\n  ".join(
        f'<p style="margin: 0 0 8px;"><strong>{escape(label)}:</strong> {escape(value)}</p>'
        for label, value in rows
    )
    return _DETAILS_HTML.format(heading=escape(heading), rows=rendered)


def _details_text(rows: list[tuple[str, str]]) -> str:
    return "\n".join(f"{label}: {value}" for label, value in rows)


def _wrap(title: str, content: str) -> str:
    return _BASE_HTML.format(title=escape(title), brand=BRAND_NAME, content=content)


def application_url(app_url: str, application_id: object) -> str:
    """Build the link to an application in the web app."""
    return f"{app_url.rstrip('/')}/applications/{application_id}"


def render_interview_reminder(
    *,
    to: str,
    greeting_name: str,
    company: str | None,
    job_title: str | None,
    interview_date: datetime | None,
    link: str,
) -> EmailMessage:
    """Render the interview reminder email.

    :param to: Recipient address.
    :param greeting_name: Name to greet the recipient by.
    :param company: Company name.
    :param job_title: Position applied for.
    :param interview_date: Interview date, if known.
    :param link: Link to the application in the web app.
    :returns: The rendered message.
    """
    rows = [
        ("Company", company or "the company"),
        ("Position", job_title or "the position"),
        ("Date", _format_date(interview_date)),
    ]
    intro = "This is a friendly reminder about your upcoming interview:"

    content = (
        f'<h2 style="margin: 0 0 20px; color: #212529;">Interview Reminder</h2>\n'
        f"<p>Hi {escape(greeting_name)},</p>\n"
        f"<p>{intro}</p>\n"
        f"{_details_html('Interview Details', rows)}"
        f"{_BUTTON_HTML.format(url=escape(link), label='View Application Details')}"
        f"<p>Good luck with your interview!</p>"
    )
    text = (
        f"Hi {greeting_name},\n\n{intro}\n\n{_details_text(rows)}\n\n"
        f"View application details: {link}\n\nGood luck with your interview!"
    )

    return EmailMessage(
        to=to,
        subject=f"Interview Reminder: {company or 'Upcoming Interview'}",
        html=_wrap("Interview Reminder", content),
        text=text,
    )


def render_generic_reminder(
    *,
    to: str,
    greeting_name: str,
    company: str | None,
    job_title: str | None,
    status: str | None,
    reminder_type: ReminderType,
    link: str,
) -> EmailMessage:
    """Render a follow-up, deadline or response-check reminder email.

    Unknown types fall back to the follow-up wording.

    :param to: Recipient address.
    :param greeting_name: Name to greet the recipient by.
    :param company: Company name.
    :param job_title: Position applied for.
    :param status: Current application status.
    :param reminder_type: The reminder type.
    :param link: Link to the application in the web app.
    :returns: The rendered message.
    """
    copy = _GENERIC_COPY.get(reminder_type, _GENERIC_COPY[ReminderType.FOLLOW_UP])
    rows = [
        ("Company", company or "the company"),
        ("Position", job_title or "the position"),
        ("Status", (status or "applied").capitalize()),
    ]

    content = (
        f'<h2 style="margin: 0 0 20px; color: #212529;">{escape(copy.title)}</h2>\n'
        f"<p>Hi {escape(greeting_name)},</p>\n"
        f"<p>{escape(copy.message)}</p>\n"
        f"{_details_html('Application Details', rows)}"
        f"{_BUTTON_HTML.format(url=escape(link), label=escape(copy.action))}"
        f"<p>Stay organised and keep track of your job search progress!</p>"
    )
    text = (
        f"Hi {greeting_name},\n\n{copy.message}\n\n{_details_text(rows)}\n\n"
        f"{copy.action}: {link}"
    )

    return EmailMessage(
        to=to,
        subject=f"{copy.subject}: {company or 'Your Application'}",
        html=_wrap(copy.title, content),
        text=text,
    )
