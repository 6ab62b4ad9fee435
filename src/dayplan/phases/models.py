from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import ClassVar, Literal, Optional, Union

from dayplan.recurrence import RecurrenceRule


@dataclass(frozen=True, slots=True)
class Project:
    """
    A project as the engine sees it.

    ``end_date=None`` means continuous.  ``continuous`` defaults to that, but
    may be given explicitly for records that keep a stale end date around.
    """

    id: str
    name: str
    start_date: date
    end_date: Optional[date] = None
    estimated_hours: float = 0.0
    continuous: Optional[bool] = field(default=None)

    def __post_init__(self) -> None:
        if self.continuous is None:
            object.__setattr__(self, "continuous", self.end_date is None)

    @property
    def is_time_limited(self) -> bool:
        return not self.continuous and self.end_date is not None

    def contains(self, d: date) -> bool:
        if d < self.start_date:
            return False
        return not self.is_time_limited or d <= self.end_date

    def is_fully_past(self, today: date) -> bool:
        return self.is_time_limited and self.end_date < today


@dataclass(frozen=True, slots=True)
class ExplicitPhase:
    """Fixed date range with a total hour allocation spread over its working days."""

    kind: ClassVar[Literal["explicit"]] = "explicit"

    id: str
    project_id: str
    name: str
    start_date: date
    end_date: date
    hours: float


@dataclass(frozen=True, slots=True)
class RecurringPhase:
    """Repeat pattern with a fixed allocation per occurrence."""

    kind: ClassVar[Literal["recurring"]] = "recurring"

    id: str
    project_id: str
    name: str
    rule: RecurrenceRule
    hours_per_occurrence: float


Phase = Union[ExplicitPhase, RecurringPhase]
