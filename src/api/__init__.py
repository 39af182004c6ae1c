"""API module for the job tracker reminder service."""

from src.api.app import app

__all__ = ["app"]
