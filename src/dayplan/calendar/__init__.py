"""
dayplan.calendar
~~~~~~~~~~~~~~~~

Working-day resolution.  A WorkingCalendar turns a weekly template of work
slots plus a set of holiday ranges into per-date working hours, backed by a
dense NumPy array with prefix sums for fast range queries.

Basic usage::

    from datetime import date
    from dayplan.calendar import Holiday, WeeklyTemplate, WorkingCalendar

    template = WeeklyTemplate.from_mapping({
        "monday": [("09:00", "12:00"), ("13:00", "17:00")],   # split shift
        "tuesday": [("09:00", "17:00")],
    })
    cal = WorkingCalendar(template, holidays=[Holiday(date(2026, 2, 3), date(2026, 2, 3))])

    cal.is_working_day(date(2026, 2, 2))                     # → True
    cal.working_hours(date(2026, 2, 2))                      # → 7.0
    cal.working_days(date(2026, 2, 1), date(2026, 2, 8))     # → [date(2026, 2, 2)]

Public API
----------
WorkingCalendar  The main class.
WeeklyTemplate   Work slots per weekday.
WorkSlot         A same-day HH:MM–HH:MM working period.
Holiday          An inclusive non-working date range.
CalendarError    Base exception for all calendar-related errors.
"""

from __future__ import annotations

from dayplan.calendar._exceptions import CalendarError
from dayplan.calendar.calendar import WorkingCalendar
from dayplan.calendar.slots import WEEKDAY_NAMES, Holiday, WeeklyTemplate, WorkSlot

__all__ = [
    "WorkingCalendar",
    "WeeklyTemplate",
    "WorkSlot",
    "Holiday",
    "CalendarError",
    "WEEKDAY_NAMES",
]
