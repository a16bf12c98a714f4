"""FastAPI dependency injection."""

from datetime import date


def get_today() -> date:
    """Clock for schedules requested without a start date. Overridden in tests."""
    return date.today()
