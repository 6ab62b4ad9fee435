from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import ClassVar, Optional

from dateutil.rrule import DAILY, FR, MO, MONTHLY, SA, SU, TH, TU, WE, WEEKLY, YEARLY, rrule

from ._exceptions import RecurrenceError

_WEEKDAYS = (MO, TU, WE, TH, FR, SA, SU)
_DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


class RecurrenceType(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class MonthlyPattern(str, enum.Enum):
    DATE = "date"
    DAY_OF_WEEK = "day_of_week"


def _ordinal(n: int) -> str:
    if n == -1:
        return "last"
    if 10 <= n % 100 <= 20:
        return f"{n}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


@dataclass(frozen=True, slots=True)
class RecurrenceRule:
    """
    A repeat pattern anchored at a date.

    Weekdays are Python weekdays (0 = Monday).  Without constraints the
    pattern repeats on the anchor's own weekday / day-of-month / anniversary,
    so a monthly rule anchored on the 31st skips months without a 31st.

    ``week_of_month`` is 1..4 or -1 for the last such weekday of the month.
    ``month`` only applies to yearly rules.
    """

    type: RecurrenceType
    anchor: date
    interval: int = 1
    weekday: Optional[int] = None
    monthly_pattern: Optional[MonthlyPattern] = None
    month_day: Optional[int] = None
    week_of_month: Optional[int] = None
    month: Optional[int] = None

    _FREQ: ClassVar[dict[RecurrenceType, int]] = {
        RecurrenceType.DAILY: DAILY,
        RecurrenceType.WEEKLY: WEEKLY,
        RecurrenceType.MONTHLY: MONTHLY,
        RecurrenceType.YEARLY: YEARLY,
    }

    def _options(self) -> dict:
        try:
            kind = RecurrenceType(self.type)
        except ValueError:
            raise RecurrenceError(f"Unknown recurrence type {self.type!r}.") from None
        if self.interval is None or self.interval < 1:
            raise RecurrenceError(f"Interval must be at least 1; got {self.interval}.")
        if self.weekday is not None and not 0 <= self.weekday <= 6:
            raise RecurrenceError(f"Weekday must be in 0..6; got {self.weekday}.")
        if self.month_day is not None and not 1 <= self.month_day <= 31:
            raise RecurrenceError(f"Day of month must be in 1..31; got {self.month_day}.")
        if self.week_of_month is not None and self.week_of_month not in (1, 2, 3, 4, -1):
            raise RecurrenceError(
                f"Week of month must be 1..4 or -1; got {self.week_of_month}."
            )
        if self.month is not None and not 1 <= self.month <= 12:
            raise RecurrenceError(f"Month must be in 1..12; got {self.month}.")

        opts: dict = {"freq": self._FREQ[kind], "interval": int(self.interval)}

        if kind is RecurrenceType.WEEKLY and self.weekday is not None:
            opts["byweekday"] = _WEEKDAYS[self.weekday]

        elif kind is RecurrenceType.MONTHLY:
            if self.monthly_pattern == MonthlyPattern.DAY_OF_WEEK:
                if self.weekday is None or self.week_of_month is None:
                    raise RecurrenceError(
                        "A day-of-week monthly rule needs weekday and week_of_month."
                    )
                opts["byweekday"] = _WEEKDAYS[self.weekday](self.week_of_month)
            elif self.month_day is not None:
                opts["bymonthday"] = self.month_day

        elif kind is RecurrenceType.YEARLY and self.month is not None:
            opts["bymonth"] = self.month
            opts["bymonthday"] = self.month_day or self.anchor.day

        return opts

    def to_rrule(self, until: Optional[date] = None) -> rrule:
        opts = self._options()
        if until is not None:
            opts["until"] = datetime.combine(until, time.max)
        return rrule(dtstart=datetime.combine(self.anchor, time.min), **opts)

    def to_rfc5545(self, until: Optional[date] = None) -> str:
        return str(self.to_rrule(until))

    def describe(self) -> str:
        kind = RecurrenceType(self.type)
        n = self.interval
        every = "Every " if n == 1 else f"Every {n} "

        if kind is RecurrenceType.DAILY:
            return every + ("day" if n == 1 else "days")

        if kind is RecurrenceType.WEEKLY:
            day = _DAY_NAMES[self.weekday if self.weekday is not None else self.anchor.weekday()]
            return every + ("week" if n == 1 else "weeks") + f" on {day}"

        unit = every + (kind.value[:-2] if n == 1 else kind.value[:-2] + "s")
        if kind is RecurrenceType.MONTHLY:
            if (
                self.monthly_pattern == MonthlyPattern.DAY_OF_WEEK
                and self.weekday is not None
                and self.week_of_month is not None
            ):
                return f"{unit} on the {_ordinal(self.week_of_month)} {_DAY_NAMES[self.weekday]}"
            return f"{unit} on the {_ordinal(self.month_day or self.anchor.day)}"

        month = self.month or self.anchor.month
        return f"{unit} on {_MONTH_NAMES[month - 1]} {self.month_day or self.anchor.day}"
