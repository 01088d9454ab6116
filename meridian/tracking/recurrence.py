"""
Recurrence date expansion for recurring meetings.

``generate_occurrences`` turns a recurrence definition into the concrete
calendar dates on which the meeting takes place inside a query range. The
output is clipped to ``[start_date, end_date] ∩ [range_start, range_end]``,
returned as ascending ISO ``YYYY-MM-DD`` strings, and depends on nothing but
its arguments.

Day-of-week values use 0=Sunday .. 6=Saturday, which is what the stored
``day_of_week`` column holds.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import List, Optional, Protocol, Tuple, Union

from meridian.core.models.domain.enums import RecurrencePattern

DateLike = Union[date, str]

# Upper bound on months walked for a monthly pattern (ten years)
MAX_MONTHLY_ITERATIONS = 120

DAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
DAY_LABELS_FULL = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


class RecurrenceRule(Protocol):
    """Attributes the expander reads; ``RecurringMeeting`` rows satisfy it."""

    recurrence: str
    start_date: DateLike
    end_date: Optional[DateLike]
    day_of_week: Optional[int]
    day_of_month: Optional[int]
    custom_interval_days: Optional[int]


def parse_date(value: DateLike) -> date:
    """Parse ``YYYY-MM-DD`` (or pass a date through)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def format_date(value: date) -> str:
    return value.isoformat()


def add_days(value: DateLike, days: int) -> str:
    return format_date(parse_date(value) + timedelta(days=days))


def get_today_str(today: Optional[date] = None) -> str:
    return format_date(today or date.today())


def sunday_based_weekday(value: date) -> int:
    """Weekday with Sunday as 0."""
    return (value.weekday() + 1) % 7


def get_week_range(value: Optional[DateLike] = None) -> Tuple[str, str]:
    """Monday..Sunday week containing ``value`` (today by default)."""
    day = parse_date(value) if value is not None else date.today()
    monday = day - timedelta(days=day.weekday())
    return format_date(monday), format_date(monday + timedelta(days=6))


def get_day_range(value: Optional[DateLike] = None) -> Tuple[str, str]:
    day = format_date(parse_date(value) if value is not None else date.today())
    return day, day


def day_of_week_label(day_of_week: int) -> str:
    return DAY_LABELS[day_of_week % 7]


def day_of_week_label_full(day_of_week: int) -> str:
    return DAY_LABELS_FULL[day_of_week % 7]


def format_time_display(time_of_day: str) -> str:
    """Render ``HH:MM`` as a 12-hour clock string, e.g. ``13:05`` -> ``1:05 PM``."""
    hours_str, _, minutes_str = time_of_day.partition(":")
    hours = int(hours_str)
    minutes = minutes_str[:2] or "00"
    suffix = "PM" if hours >= 12 else "AM"
    display_hour = hours % 12 or 12
    return f"{display_hour}:{minutes} {suffix}"


def _advance_to_weekday(value: date, day_of_week: int) -> date:
    return value + timedelta(days=(day_of_week - sunday_based_weekday(value) + 7) % 7)


def _skip_ahead(cursor: date, target: date, step_days: int) -> date:
    """Jump ``cursor`` forward by whole steps without passing ``target``."""
    if cursor >= target:
        return cursor
    steps = (target - cursor).days // step_days
    return cursor + timedelta(days=steps * step_days)


def _stepped(first: date, step_days: int, lower: date, upper: date) -> List[str]:
    dates: List[str] = []
    cursor = _skip_ahead(first, lower, step_days)
    while cursor <= upper:
        if cursor >= lower:
            dates.append(format_date(cursor))
        cursor += timedelta(days=step_days)
    return dates


def _monthly(start: date, day_of_month: int, lower: date, upper: date) -> List[str]:
    dates: List[str] = []
    year, month = max((start.year, start.month), (lower.year, lower.month))
    for _ in range(MAX_MONTHLY_ITERATIONS):
        last_day = calendar.monthrange(year, month)[1]
        candidate = date(year, month, min(day_of_month, last_day))
        if candidate > upper:
            break
        if candidate >= lower:
            dates.append(format_date(candidate))
        month += 1
        if month > 12:
            month = 1
            year += 1
    return dates


def generate_occurrences(rule: RecurrenceRule, range_start: DateLike, range_end: DateLike) -> List[str]:
    """
    Expand ``rule`` into the ISO dates it occurs on within the query range.

    Args:
        rule: Recurrence definition (pattern, start/end date, optional day-of-week,
            day-of-month and custom interval)
        range_start: First date of the query range (inclusive)
        range_end: Last date of the query range (inclusive)

    Returns:
        Ascending list of ``YYYY-MM-DD`` strings
    """
    start = parse_date(rule.start_date)
    end = parse_date(rule.end_date) if rule.end_date else None
    r_start = parse_date(range_start)
    r_end = parse_date(range_end)

    lower = max(start, r_start)
    upper = min(r_end, end) if end is not None else r_end
    if upper < lower:
        return []

    pattern = RecurrencePattern(rule.recurrence)

    if pattern is RecurrencePattern.daily:
        return _stepped(lower, 1, lower, upper)

    if pattern in (RecurrencePattern.weekly, RecurrencePattern.biweekly):
        day_of_week = rule.day_of_week if rule.day_of_week is not None else sunday_based_weekday(start)
        if pattern is RecurrencePattern.weekly:
            return _stepped(_advance_to_weekday(lower, day_of_week), 7, lower, upper)
        # Anchored on the start date so the fortnightly phase never depends on the query range
        return _stepped(_advance_to_weekday(start, day_of_week), 14, lower, upper)

    if pattern is RecurrencePattern.monthly:
        return _monthly(start, rule.day_of_month or start.day, lower, upper)

    interval = rule.custom_interval_days if rule.custom_interval_days and rule.custom_interval_days > 0 else 1
    return _stepped(start, interval, lower, upper)
