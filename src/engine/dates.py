"""Calendar position of a payment, counted in months from a base date."""

from datetime import date

from src.models.loan import CalendarMonth


def date_at_offset(offset: int, base: date) -> CalendarMonth:
    """Year and zero-based month `offset` months after base's month.

    Offset 1 from any day in October 1985 is (1985, 10), i.e. November.
    """
    cumulative = offset + (base.month - 1)
    years_ahead = cumulative // 12
    return CalendarMonth(
        year=base.year + years_ahead,
        month=cumulative - years_ahead * 12,
    )
