"""Reminder scheduling, auto-creation and notification delivery."""
