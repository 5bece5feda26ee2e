"""Working day arithmetic for sprint and date-range reports."""

from collections.abc import Iterable
from datetime import date, timedelta

from team_productivity.schemas.leave import LeaveRange, LeaveRecord

COUNTED_LEAVE_STATUSES = frozenset({"Confirmed", "Sick"})


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def is_on_leave(day: date, leave_ranges: Iterable[LeaveRange]) -> bool:
    """True if the day falls inside a Confirmed or Sick leave range."""
    return any(
        leave.status in COUNTED_LEAVE_STATUSES and leave.date_from <= day <= leave.date_to
        for leave in leave_ranges
    )


def calculate_working_days(
    start: date,
    end: date,
    leave_ranges: Iterable[LeaveRange] = (),
    holiday_dates: Iterable[str] = (),
) -> int:
    """
    Counts days in [start, end] that are not weekends, counted leave or
    national holidays.

    A day excluded for several reasons is only excluded once.
    """
    if start > end:
        return 0

    leave_ranges = list(leave_ranges)
    holidays = set(holiday_dates)

    working_days = 0
    current = start
    while current <= end:
        if not (
            is_weekend(current)
            or is_on_leave(current, leave_ranges)
            or current.isoformat() in holidays
        ):
            working_days += 1
        current += timedelta(days=1)
    return working_days


def leave_for_member(records: Iterable[LeaveRecord], member_name: str) -> list[LeaveRange]:
    """Leave ranges of the record whose name matches member_name, ignoring case."""
    wanted = member_name.lower()
    for record in records:
        if record.name.lower() == wanted:
            return list(record.leave_date)
    return []
