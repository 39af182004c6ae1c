"""Exceptions for outbound email."""


class EmailClientError(Exception):
    """Raised when an email cannot be delivered by the configured backend."""
