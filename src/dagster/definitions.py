"""Combine all dagster definitions."""

from dagster import Definitions
from src.dagster.reminders.definitions import defs as reminders_defs

defs = Definitions.merge(reminders_defs)
