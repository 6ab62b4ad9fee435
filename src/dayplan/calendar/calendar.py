from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Hashable, Iterable, Optional

import numpy as np

from ._exceptions import CalendarError
from .slots import Holiday, WeeklyTemplate

logger = logging.getLogger(__name__)

# Default day 0 when neither an origin nor holidays are given; a Monday.
_EPOCH = date(2000, 1, 3)


class WorkingCalendar:
    """
    Compiled working calendar: dense per-day hours + prefix-sum arrays.

    Day ``i`` of the arrays is ``origin + i``.  Hours come from the weekly
    template and are zeroed inside holiday ranges.  The arrays grow in either
    direction when a query falls outside them, so answers never depend on the
    order of calls.
    """

    _DEFAULT_BUFFER: int = 365 * 3

    def __init__(
        self,
        template: WeeklyTemplate,
        holidays: Iterable[Holiday] = (),
        origin: Optional[date] = None,
        horizon: Optional[int] = None,
    ) -> None:
        self._template = template
        self._np_pattern: np.ndarray = np.array(template.hours_pattern(), dtype=float)

        self._holidays: list[Holiday] = []
        for h in holidays:
            self._check_holiday(h)
            self._holidays.append(h)

        if origin is None:
            origin = min((h.start for h in self._holidays), default=_EPOCH)
        self._origin: date = origin

        last_hol = max(
            ((h.end - origin).days for h in self._holidays), default=-1
        )
        if horizon is None:
            horizon = max(last_hol + 1, 0) + self._DEFAULT_BUFFER
        if horizon < 1:
            raise CalendarError(f"Horizon must be at least 1 day; got {horizon}.")
        self._horizon: int = max(horizon, last_hol + 1)

        self._weights: np.ndarray = self._pattern_for(0, self._horizon)
        for h in self._holidays:
            self._zero_range(h)

        self._build_prefix()

    # ── pattern / prefix management ──────────────────────────────────────

    def _pattern_for(self, first: int, stop: int) -> np.ndarray:
        offsets = np.arange(first, stop, dtype=np.int64) + self._origin.weekday()
        return self._np_pattern[offsets % 7].copy()

    def _build_prefix(self) -> None:
        self._prefix_hours = np.empty(self._horizon + 1, dtype=float)
        self._prefix_hours[0] = 0.0
        np.cumsum(self._weights, out=self._prefix_hours[1:])

        self._prefix_days = np.zeros(self._horizon + 1, dtype=np.int64)
        np.cumsum(self._weights > 0.0, out=self._prefix_days[1:])

    def _rebuild_prefix_from(self, day: int) -> None:
        self._prefix_hours[day + 1:] = (
            self._prefix_hours[day] + np.cumsum(self._weights[day:])
        )
        self._prefix_days[day + 1:] = (
            self._prefix_days[day] + np.cumsum(self._weights[day:] > 0.0)
        )

    def _extend_to(self, new_horizon: int) -> None:
        old = self._horizon
        self._weights = np.concatenate(
            [self._weights, self._pattern_for(old, new_horizon)]
        )
        self._horizon = new_horizon
        for h in self._holidays:
            self._zero_range(h, first=old)
        self._build_prefix()
        logger.debug("Calendar horizon extended forward to %d days", new_horizon)

    def _extend_back(self, days: int) -> None:
        self._origin -= timedelta(days=days)
        self._weights = np.concatenate(
            [self._pattern_for(0, days), self._weights]
        )
        self._horizon += days
        for h in self._holidays:
            self._zero_range(h, stop=days)
        self._build_prefix()
        logger.debug("Calendar origin moved back to %s", self._origin)

    def _zero_range(
        self, holiday: Holiday, first: int = 0, stop: Optional[int] = None
    ) -> tuple[int, int] | None:
        stop = self._horizon if stop is None else stop
        i0 = max((holiday.start - self._origin).days, first)
        i1 = min((holiday.end - self._origin).days + 1, stop)
        if i0 >= i1:
            return None
        self._weights[i0:i1] = 0.0
        return i0, i1

    def _index(self, d: date) -> int:
        i = (d - self._origin).days
        if i < 0:
            self._extend_back(-i + self._DEFAULT_BUFFER)
            i = (d - self._origin).days
        if i >= self._horizon:
            self._extend_to(i + 1 + self._DEFAULT_BUFFER)
        return i

    def _span(self, start: date, end: date) -> tuple[int, int]:
        i = self._index(start)
        j = self._index(end)
        return i, j

    @staticmethod
    def _check_holiday(holiday: Holiday) -> None:
        if holiday.end < holiday.start:
            raise CalendarError(
                f"Holiday {holiday.name!r} ends ({holiday.end}) "
                f"before it starts ({holiday.start})."
            )

    # ── single-day queries ───────────────────────────────────────────────

    def is_working_day(self, d: date) -> bool:
        # _index may replace self._weights; resolve it before subscripting.
        i = self._index(d)
        return bool(self._weights[i] > 0.0)

    def working_hours(self, d: date) -> float:
        i = self._index(d)
        return float(self._weights[i])

    # ── range queries ────────────────────────────────────────────────────

    def working_days(self, start: date, end: date) -> list[date]:
        """Working days in ``start..end`` inclusive, in order."""
        if end < start:
            return []
        i, j = self._span(start, end)
        idx = np.flatnonzero(self._weights[i:j + 1] > 0.0)
        return [start + timedelta(days=int(k)) for k in idx]

    def count_working_days(self, start: date, end: date) -> int:
        if end < start:
            return 0
        i, j = self._span(start, end)
        return int(self._prefix_days[j + 1] - self._prefix_days[i])

    def working_hours_between(self, start: date, end: date) -> float:
        if end < start:
            return 0.0
        i, j = self._span(start, end)
        return float(self._prefix_hours[j + 1] - self._prefix_hours[i])

    def next_working_day(self, d: date, include_self: bool = True) -> date:
        if float(self._np_pattern.max()) <= 0.0:
            raise CalendarError(
                "The weekly template has no working hours; no working day exists."
            )
        first = d if include_self else d + timedelta(days=1)
        i = self._index(first)
        target = self._prefix_days[i] + 1
        fi = int(np.searchsorted(self._prefix_days, target, side="left"))
        while fi > self._horizon:
            # Only holidays can push the next working day past the horizon.
            self._extend_to(self._horizon + self._DEFAULT_BUFFER)
            fi = int(np.searchsorted(self._prefix_days, target, side="left"))
        return self._origin + timedelta(days=fi - 1)

    # ── holiday management ───────────────────────────────────────────────

    def add_holiday(self, holiday: Holiday) -> None:
        self._check_holiday(holiday)
        # Make sure both ends are covered before zeroing.
        self._index(holiday.start)
        self._index(holiday.end)
        self._holidays.append(holiday)
        span = self._zero_range(holiday)
        if span is not None:
            self._rebuild_prefix_from(span[0])

    def remove_holiday(self, holiday: Holiday) -> None:
        if holiday not in self._holidays:
            return
        self._holidays.remove(holiday)
        i0 = max((holiday.start - self._origin).days, 0)
        i1 = min((holiday.end - self._origin).days + 1, self._horizon)
        if i0 >= i1:
            return
        self._weights[i0:i1] = self._pattern_for(i0, i1)
        for other in self._holidays:
            self._zero_range(other, first=i0, stop=i1)
        self._rebuild_prefix_from(i0)

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def template(self) -> WeeklyTemplate:
        return self._template

    @property
    def holidays(self) -> tuple[Holiday, ...]:
        return tuple(self._holidays)

    @property
    def origin(self) -> date:
        return self._origin

    @property
    def horizon(self) -> int:
        return self._horizon

    @property
    def weekly_hours(self) -> float:
        return float(self._np_pattern.sum())

    @property
    def fingerprint(self) -> Hashable:
        """Value identity of the inputs that determine every answer."""
        hols = tuple(sorted(set(self._holidays), key=lambda h: (h.start, h.end, h.name)))
        return (self._template, hols)

    def __repr__(self) -> str:
        return (
            f"WorkingCalendar(pattern={self._np_pattern.tolist()}, "
            f"weekly_hours={self.weekly_hours}, "
            f"origin={self._origin.isoformat()}, "
            f"horizon={self._horizon}, "
            f"holidays={len(self._holidays)})"
        )
