from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Iterable, Optional, Sequence

from dayplan.calendar import WorkingCalendar
from dayplan.phases import CalculationWindow, PhaseAllocation, Project

from ._exceptions import EstimateComputationError
from .models import CalendarEvent, DayEstimate, EstimateSource

logger = logging.getLogger(__name__)


class DayEstimateCalculator:
    """
    Produces at most one DayEstimate per (project, date).

    Priority per day: logged events, then phase allocations, then the
    project-level auto-estimate (only for projects without any phase).
    A day claimed by an event never receives an estimated entry, and the
    hours it would have received are not moved to other days.
    """

    def calculate(
        self,
        project: Project,
        resolved_phases: Sequence[PhaseAllocation],
        calendar: WorkingCalendar,
        events: Iterable[CalendarEvent] = (),
        *,
        today: Optional[date] = None,
        window: Optional[CalculationWindow] = None,
        has_phases: Optional[bool] = None,
    ) -> list[DayEstimate]:
        """
        ``has_phases`` tells whether the project owns phases at all; it
        defaults to ``bool(resolved_phases)``.  Pass it when a recurring phase
        may resolve to nothing inside the window, so the project-level
        fallback does not kick in by mistake.

        ``today`` only decides whether a time-limited project has ended; such
        a project keeps its event entries and nothing else.  Past days of a
        project that is still running keep their estimates.
        """
        try:
            return self._calculate(
                project, resolved_phases, calendar, events, today, window,
                bool(resolved_phases) if has_phases is None else has_phases,
            )
        except (TypeError, ValueError, AttributeError, LookupError, ArithmeticError) as exc:
            raise EstimateComputationError(
                f"Could not compute day estimates for project "
                f"{getattr(project, 'id', None)!r}: {exc}"
            ) from exc

    def _calculate(
        self,
        project: Project,
        resolved_phases: Sequence[PhaseAllocation],
        calendar: WorkingCalendar,
        events: Iterable[CalendarEvent],
        today: Optional[date],
        window: Optional[CalculationWindow],
        has_phases: bool,
    ) -> list[DayEstimate]:
        claimed = self._event_hours(project.id, events)
        estimates: list[DayEstimate] = [
            DayEstimate(
                project.id, d, planned + completed, EstimateSource.EVENT,
                is_planned_event=planned > 0.0,
                is_completed_event=completed > 0.0,
            )
            for d, (planned, completed) in claimed.items()
            if planned + completed > 0.0
        ]

        if today is not None and project.is_fully_past(today):
            logger.debug("Project %s ended before %s; events only", project.id, today)
        elif has_phases:
            estimates.extend(self._phase_estimates(project, resolved_phases, calendar, claimed))
        else:
            estimates.extend(self._auto_estimates(project, calendar, claimed, window))

        estimates.sort(key=lambda e: e.date)
        logger.debug(
            "Project %s: %d day estimates (%d event days)",
            project.id, len(estimates), len(claimed),
        )
        return estimates

    # ── step 1: logged events ────────────────────────────────────────────

    @staticmethod
    def _event_hours(
        project_id: str, events: Iterable[CalendarEvent]
    ) -> dict[date, tuple[float, float]]:
        planned: dict[date, float] = defaultdict(float)
        completed: dict[date, float] = defaultdict(float)
        days: list[date] = []
        for ev in events:
            if not ev.blocks_estimates_for(project_id):
                continue
            d = ev.date
            if d not in planned and d not in completed:
                days.append(d)
            if ev.is_completed:
                completed[d] += ev.duration_hours
            else:
                planned[d] += ev.duration_hours
        return {d: (planned.get(d, 0.0), completed.get(d, 0.0)) for d in days}

    # ── step 2: phase allocations ────────────────────────────────────────

    @staticmethod
    def _phase_estimates(
        project: Project,
        allocations: Sequence[PhaseAllocation],
        calendar: WorkingCalendar,
        claimed: dict[date, tuple[float, float]],
    ) -> list[DayEstimate]:
        hours: dict[date, float] = defaultdict(float)
        contributors: dict[date, list[str]] = defaultdict(list)

        for alloc in allocations:
            if alloc.hours <= 0.0:
                continue
            if alloc.recurring:
                # Occurrences on a non-working day are dropped, not moved.
                days = [alloc.start_date] if calendar.is_working_day(alloc.start_date) else []
                per_day = alloc.hours
            else:
                days = calendar.working_days(alloc.start_date, alloc.end_date)
                per_day = alloc.hours / len(days) if days else 0.0

            for d in days:
                if d in claimed:
                    continue
                if project.is_time_limited and d > project.end_date:
                    continue
                hours[d] += per_day
                if alloc.phase_id not in contributors[d]:
                    contributors[d].append(alloc.phase_id)

        return [
            DayEstimate(
                project.id, d, h, EstimateSource.PHASE_ALLOCATION,
                phase_ids=tuple(contributors[d]),
            )
            for d, h in hours.items()
        ]

    # ── step 3: project-level fallback ───────────────────────────────────

    @staticmethod
    def _auto_estimates(
        project: Project,
        calendar: WorkingCalendar,
        claimed: dict[date, tuple[float, float]],
        window: Optional[CalculationWindow],
    ) -> list[DayEstimate]:
        if not project.is_time_limited or project.estimated_hours <= 0.0:
            return []
        days = calendar.working_days(project.start_date, project.end_date)
        if not days:
            return []
        per_day = project.estimated_hours / len(days)
        return [
            DayEstimate(project.id, d, per_day, EstimateSource.PROJECT_AUTO_ESTIMATE)
            for d in days
            if d not in claimed and (window is None or window.contains(d))
        ]


def aggregate_by_date(estimates: Iterable[DayEstimate]) -> dict[date, list[DayEstimate]]:
    """Group estimates (typically of several projects) by calendar date."""
    by_date: dict[date, list[DayEstimate]] = defaultdict(list)
    for est in estimates:
        by_date[est.date].append(est)
    return dict(sorted(by_date.items()))


def total_hours(estimates: Iterable[DayEstimate]) -> float:
    return float(sum(est.hours for est in estimates))
