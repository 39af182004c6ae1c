"""Pydantic models for outbound email."""

from pydantic import BaseModel, Field


class EmailMessage(BaseModel):
    """A rendered email ready to send."""

    to: str = Field(..., min_length=3)
    subject: str
    html: str
    text: str


class SendEmailResult(BaseModel):
    """Result of handing an email to the delivery backend."""

    message_id: str
    backend: str
