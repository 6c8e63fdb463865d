"""Calendar helpers shared by the notification rules."""

import calendar
from datetime import date

from dateutil.relativedelta import relativedelta


FREQUENCY_STEPS = {
    "weekly": relativedelta(weeks=+1),
    "monthly": relativedelta(months=+1),
    "yearly": relativedelta(years=+1),
}


def month_key(day: date) -> str:
    """Return the YYYY-MM key a budget uses for the month containing ``day``."""
    return f"{day.year:04d}-{day.month:02d}"


def anchored_date(year: int, month: int, anchor_day: int) -> date:
    """
    Build a date in the given month while preserving the 'anchor' day.
    Example: an anchor of 31 gives Feb 28th, then Mar 31st.
    """
    # Handle year rollover in both directions
    while month > 12:
        month -= 12
        year += 1
    while month < 1:
        month += 12
        year -= 1

    _, last_day_of_month = calendar.monthrange(year, month)
    return date(year, month, min(anchor_day, last_day_of_month))


def next_anchored_date(today: date, anchor_day: int) -> date:
    """First date on or after ``today`` that falls on the monthly anchor."""
    candidate = anchored_date(today.year, today.month, anchor_day)
    if candidate < today:
        candidate = anchored_date(today.year, today.month + 1, anchor_day)
    return candidate


def previous_anchored_date(due: date, anchor_day: int) -> date:
    return anchored_date(due.year, due.month - 1, anchor_day)


def advance_due_date(due: date, frequency: str) -> date:
    """Move a recurring due date forward by one period of ``frequency``."""
    try:
        step = FREQUENCY_STEPS[frequency]
    except KeyError:
        raise ValueError(f"Unknown frequency: {frequency}") from None
    return due + step
