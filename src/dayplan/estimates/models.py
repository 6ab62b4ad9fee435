from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


class EventCategory(str, enum.Enum):
    PLANNED = "planned"
    COMPLETED = "completed"
    HABIT = "habit"
    TASK = "task"


class EstimateSource(str, enum.Enum):
    EVENT = "event"
    PHASE_ALLOCATION = "phase-allocation"
    PROJECT_AUTO_ESTIMATE = "project-auto-estimate"


@dataclass(frozen=True, slots=True)
class CalendarEvent:
    """A logged or planned block of time; start and end fall on the same day."""

    id: str
    start: datetime
    end: datetime
    project_id: Optional[str] = None
    category: EventCategory = EventCategory.PLANNED

    @property
    def date(self) -> date:
        return self.start.date()

    @property
    def duration_hours(self) -> float:
        return max((self.end - self.start).total_seconds(), 0.0) / 3600.0

    @property
    def is_completed(self) -> bool:
        return self.category == EventCategory.COMPLETED

    def blocks_estimates_for(self, project_id: str) -> bool:
        """Project-linked planned/completed events claim their day."""
        return self.project_id == project_id and self.category in (
            EventCategory.PLANNED,
            EventCategory.COMPLETED,
        )


@dataclass(frozen=True, slots=True)
class DayEstimate:
    project_id: str
    date: date
    hours: float
    source: EstimateSource
    phase_ids: tuple[str, ...] = ()
    is_planned_event: bool = False
    is_completed_event: bool = False
