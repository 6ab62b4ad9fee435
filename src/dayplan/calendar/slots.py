from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterator, Mapping, Sequence, Union

from ._exceptions import CalendarError

_TIME_RE = re.compile(r"^([01][0-9]|2[0-3]):([0-5][0-9])$")

WEEKDAY_NAMES: tuple[str, ...] = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)

SlotLike = Union["WorkSlot", tuple[str, str]]


def parse_minutes(value: str) -> int:
    """'HH:MM' → minutes after midnight."""
    m = _TIME_RE.match(value)
    if m is None:
        raise CalendarError(f"Time must be in HH:MM format; got {value!r}.")
    return int(m.group(1)) * 60 + int(m.group(2))


def weekday_index(day: int | str) -> int:
    if isinstance(day, str):
        try:
            return WEEKDAY_NAMES.index(day.strip().lower())
        except ValueError:
            raise CalendarError(f"Unknown weekday name {day!r}.") from None
    if not 0 <= day <= 6:
        raise CalendarError(f"Weekday must be in 0..6 (Monday..Sunday); got {day}.")
    return int(day)


@dataclass(frozen=True, slots=True)
class WorkSlot:
    """A same-day working period; duration is derived from start and end."""

    start: str
    end: str

    @property
    def start_minutes(self) -> int:
        return parse_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return parse_minutes(self.end)

    @property
    def duration(self) -> float:
        """Duration in hours."""
        s, e = self.start_minutes, self.end_minutes
        if e < s:
            raise CalendarError(
                f"Work slot {self.start}-{self.end} crosses midnight."
            )
        return (e - s) / 60.0

    def overlaps(self, other: WorkSlot) -> bool:
        return (
            self.start_minutes < other.end_minutes
            and self.end_minutes > other.start_minutes
        )


def _as_slot(slot: SlotLike) -> WorkSlot:
    if isinstance(slot, WorkSlot):
        return slot
    start, end = slot
    return WorkSlot(start, end)


@dataclass(frozen=True, slots=True)
class WeeklyTemplate:
    """
    Work slots per weekday (0 = Monday .. 6 = Sunday).

    Stored as a 7-tuple of slot tuples so templates hash and compare by value.
    """

    slots: tuple[tuple[WorkSlot, ...], ...] = field(
        default_factory=lambda: ((),) * 7
    )

    def __post_init__(self) -> None:
        if len(self.slots) != 7:
            raise CalendarError(
                f"A weekly template needs 7 days of slots; got {len(self.slots)}."
            )

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[int | str, Sequence[SlotLike]]
    ) -> WeeklyTemplate:
        days: list[list[WorkSlot]] = [[] for _ in range(7)]
        for day, slots in mapping.items():
            days[weekday_index(day)].extend(_as_slot(s) for s in slots)
        return cls(tuple(tuple(d) for d in days))

    @classmethod
    def standard(
        cls,
        hours_per_day: float = 8.0,
        days: Sequence[int | str] = (0, 1, 2, 3, 4),
        start: str = "09:00",
    ) -> WeeklyTemplate:
        """One slot of ``hours_per_day`` on each of ``days``."""
        begin = parse_minutes(start)
        finish = begin + int(round(hours_per_day * 60))
        if finish >= 24 * 60:
            raise CalendarError(
                f"{hours_per_day}h from {start} does not fit in a single day."
            )
        end = f"{finish // 60:02d}:{finish % 60:02d}"
        return cls.from_mapping({d: [(start, end)] for d in days})

    def slots_for(self, weekday: int | str) -> tuple[WorkSlot, ...]:
        return self.slots[weekday_index(weekday)]

    def hours_for(self, weekday: int | str) -> float:
        return sum(s.duration for s in self.slots_for(weekday))

    def hours_pattern(self) -> list[float]:
        return [self.hours_for(d) for d in range(7)]

    @property
    def weekly_hours(self) -> float:
        return sum(self.hours_pattern())


@dataclass(frozen=True, slots=True)
class Holiday:
    """Inclusive date range during which nobody works."""

    start: date
    end: date
    name: str = ""

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end

    def days(self) -> Iterator[date]:
        d = self.start
        while d <= self.end:
            yield d
            d += timedelta(days=1)

    @property
    def length(self) -> int:
        return max((self.end - self.start).days + 1, 0)
