from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from dayplan.config import EngineConfig
from dayplan.recurrence import RecurrenceExpander

from .models import ExplicitPhase, Phase, Project, RecurringPhase
from .window import CalculationWindow

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PhaseAllocation:
    """
    One time-bounded allocation.  A recurring occurrence is a same-day
    allocation (start == end) carrying the phase's hours-per-occurrence.
    """

    phase_id: str
    start_date: date
    end_date: date
    hours: float
    recurring: bool = False

    @property
    def is_single_day(self) -> bool:
        return self.start_date == self.end_date


class PhaseResolver:
    """Normalises a project's phases into a flat list of PhaseAllocations."""

    def __init__(
        self,
        expander: RecurrenceExpander | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._expander = expander or RecurrenceExpander(
            self._config.recurrence_fallback_limit
        )

    def resolve(
        self,
        project: Project,
        phases: Sequence[Phase],
        window_start: Optional[date] = None,
        window_end: Optional[date] = None,
        *,
        today: Optional[date] = None,
    ) -> list[PhaseAllocation]:
        kinds = {getattr(p, "kind", None) for p in phases}
        if len(kinds) > 1:
            logger.warning(
                "Project %s mixes explicit and recurring phases; resolving both",
                project.id,
            )

        allocations: list[PhaseAllocation] = []
        bounds: tuple[date, date] | None = None

        for phase in phases:
            if isinstance(phase, ExplicitPhase):
                allocations.append(
                    PhaseAllocation(phase.id, phase.start_date, phase.end_date, phase.hours)
                )
            elif isinstance(phase, RecurringPhase):
                if bounds is None:
                    bounds = self.resolution_window(project, window_start, window_end, today)
                allocations.extend(self._occurrences(project, phase, bounds))
            else:
                raise TypeError(f"Unsupported phase type: {type(phase).__name__}")

        logger.debug(
            "Resolved %d phases of project %s into %d allocations",
            len(phases), project.id, len(allocations),
        )
        return allocations

    def resolution_window(
        self,
        project: Project,
        window_start: Optional[date] = None,
        window_end: Optional[date] = None,
        today: Optional[date] = None,
    ) -> tuple[date, date]:
        """Bounds used for recurring phases of ``project``."""
        if project.is_time_limited:
            return project.start_date, project.end_date

        if window_start is not None and window_end is not None:
            window = CalculationWindow(window_start, window_end)
        elif today is not None:
            window = CalculationWindow.default(
                today,
                self._config.default_window_back_days,
                self._config.default_window_forward_days,
            )
        else:
            raise ValueError(
                f"Continuous project {project.id} needs a calculation window or today's date."
            )
        return max(window.start, project.start_date), window.end

    def _occurrences(
        self, project: Project, phase: RecurringPhase, bounds: tuple[date, date]
    ) -> list[PhaseAllocation]:
        start, end = bounds
        if end < start:
            return []
        until = project.end_date if project.is_time_limited else None
        dates = self._expander.expand(phase.rule, start, end, until=until, fallback=False)
        return [
            PhaseAllocation(phase.id, d, d, phase.hours_per_occurrence, recurring=True)
            for d in dates
        ]

    @property
    def expander(self) -> RecurrenceExpander:
        return self._expander

    @property
    def config(self) -> EngineConfig:
        return self._config
