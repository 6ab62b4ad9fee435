"""
dayplan.recurrence
~~~~~~~~~~~~~~~~~~

Recurrence rules (daily / weekly / monthly / yearly) and their expansion into
dates inside a bounded window.  Expansion is delegated to ``dateutil.rrule``.

Basic usage::

    from datetime import date
    from dayplan.recurrence import RecurrenceExpander, RecurrenceRule, RecurrenceType

    mondays = RecurrenceRule(RecurrenceType.WEEKLY, anchor=date(2026, 1, 5), weekday=0)
    exp = RecurrenceExpander()
    exp.expand(mondays, date(2026, 3, 1), date(2026, 3, 31))
    # → [date(2026, 3, 2), date(2026, 3, 9), date(2026, 3, 16), date(2026, 3, 23), date(2026, 3, 30)]

    mondays.describe()      # → "Every week on Monday"

Public API
----------
RecurrenceRule      Frozen description of a repeat pattern.
RecurrenceType      daily / weekly / monthly / yearly.
MonthlyPattern      Fixed date-of-month or Nth weekday of the month.
RecurrenceExpander  Bounded expansion with the first-K fallback.
RecurrenceError     Raised for a rule that cannot be expanded.
"""

from __future__ import annotations

from dayplan.recurrence._exceptions import RecurrenceError
from dayplan.recurrence.expander import RecurrenceExpander
from dayplan.recurrence.rule import MonthlyPattern, RecurrenceRule, RecurrenceType

__all__ = [
    "RecurrenceRule",
    "RecurrenceType",
    "MonthlyPattern",
    "RecurrenceExpander",
    "RecurrenceError",
]
