from __future__ import annotations

import logging
from datetime import date, datetime, time
from itertools import islice
from typing import Optional

from ._exceptions import RecurrenceError
from .rule import RecurrenceRule, RecurrenceType

logger = logging.getLogger(__name__)

_APPROX_DAYS = {
    RecurrenceType.DAILY: 1,
    RecurrenceType.WEEKLY: 7,
    RecurrenceType.MONTHLY: 30,
    RecurrenceType.YEARLY: 365,
}


class RecurrenceExpander:
    """
    Expands a RecurrenceRule into concrete dates inside a bounded window.

    When a window holds no occurrence at all, ``expand`` falls back to the
    first ``fallback_limit`` occurrences from the rule's anchor so callers
    still have something to show.  ``fallback_limit=0`` turns that off.
    """

    DEFAULT_FALLBACK_LIMIT: int = 100

    def __init__(self, fallback_limit: int = DEFAULT_FALLBACK_LIMIT) -> None:
        if fallback_limit < 0:
            raise ValueError(f"fallback_limit must be non-negative; got {fallback_limit}.")
        self._fallback_limit = fallback_limit

    def expand(
        self,
        rule: RecurrenceRule,
        window_start: date,
        window_end: date,
        *,
        until: Optional[date] = None,
        fallback: bool = True,
    ) -> list[date]:
        dates = self._between(rule, window_start, window_end, until)
        if dates or not fallback or self._fallback_limit == 0:
            return dates

        logger.warning(
            "No %s occurrences between %s and %s; using first %d from anchor %s",
            RecurrenceType(rule.type).value, window_start, window_end,
            self._fallback_limit, rule.anchor,
        )
        return self.first(rule, self._fallback_limit, until=until)

    def first(
        self, rule: RecurrenceRule, count: int, *, until: Optional[date] = None
    ) -> list[date]:
        if count <= 0:
            return []
        occurrences = islice(rule.to_rrule(until), count)
        return sorted({dt.date() for dt in occurrences})

    def count(
        self,
        rule: RecurrenceRule,
        window_start: date,
        window_end: date,
        *,
        until: Optional[date] = None,
    ) -> int:
        return len(self._between(rule, window_start, window_end, until))

    @staticmethod
    def estimate_count(rule: RecurrenceRule, duration_days: int) -> int:
        """Rough occurrence count over ``duration_days`` without expanding."""
        if rule.interval is None or rule.interval < 1:
            raise RecurrenceError(f"Interval must be at least 1; got {rule.interval}.")
        step = _APPROX_DAYS[RecurrenceType(rule.type)] * rule.interval
        return max(duration_days, 0) // step

    @property
    def fallback_limit(self) -> int:
        return self._fallback_limit

    # ── internals ────────────────────────────────────────────────────────

    @staticmethod
    def _between(
        rule: RecurrenceRule,
        window_start: date,
        window_end: date,
        until: Optional[date],
    ) -> list[date]:
        if until is not None and until < window_end:
            window_end = until
        if window_end < window_start:
            return []
        r = rule.to_rrule(until)
        hits = r.between(
            datetime.combine(window_start, time.min),
            datetime.combine(window_end, time.max),
            inc=True,
        )
        return sorted({dt.date() for dt in hits})

    def __repr__(self) -> str:
        return f"RecurrenceExpander(fallback_limit={self._fallback_limit})"
