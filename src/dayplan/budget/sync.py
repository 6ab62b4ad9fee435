from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Literal, Optional, Sequence

from dayplan.config import EngineConfig
from dayplan.phases import ExplicitPhase, Phase, Project, RecurringPhase
from dayplan.recurrence import RecurrenceExpander

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BudgetCheck:
    within_budget: bool
    total_allocated: float
    project_budget: float
    remaining: float
    overage: float
    utilization: float
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DateViolation:
    phase_id: str
    phase_name: str
    boundary: Literal["start", "end"]
    phase_date: date
    project_date: date
    message: str


@dataclass(frozen=True, slots=True)
class DateRange:
    """``end=None`` keeps a continuous project open-ended."""

    start: date
    end: Optional[date]


@dataclass(frozen=True, slots=True)
class ContainmentResult:
    valid: bool
    violations: tuple[DateViolation, ...] = field(default_factory=tuple)
    suggested_range: Optional[DateRange] = None


def _fmt(hours: float) -> str:
    return f"{hours:g}h"


class BudgetSyncEngine:
    """
    Consistency checks between a project and its phases.

    Nothing is corrected here: over-allocation and out-of-range phases come
    back as structured results, and the minimal project range that would
    contain every phase is offered as a suggestion for the caller to apply.
    """

    def __init__(
        self,
        expander: RecurrenceExpander | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._expander = expander or RecurrenceExpander(
            self._config.recurrence_fallback_limit
        )

    # ── budget ───────────────────────────────────────────────────────────

    def phase_allocation(self, phase: Phase, project: Optional[Project] = None) -> float:
        """
        Hours a phase claims from the budget.  A recurring phase counts every
        occurrence of a time-limited project, otherwise one occurrence.
        """
        if isinstance(phase, ExplicitPhase):
            return float(phase.hours)
        if isinstance(phase, RecurringPhase):
            if project is not None and project.is_time_limited:
                n = self._expander.count(
                    phase.rule, project.start_date, project.end_date,
                    until=project.end_date,
                )
                return n * float(phase.hours_per_occurrence)
            return float(phase.hours_per_occurrence)
        raise TypeError(f"Unsupported phase type: {type(phase).__name__}")

    def total_allocation(
        self, phases: Sequence[Phase], project: Optional[Project] = None
    ) -> float:
        return sum(self.phase_allocation(p, project) for p in phases)

    def check_budget(
        self,
        phases: Sequence[Phase],
        project_budget: float,
        *,
        project: Optional[Project] = None,
    ) -> BudgetCheck:
        total = self.total_allocation(phases, project)
        remaining = project_budget - total
        overage = -remaining if remaining < 0 else 0.0
        utilization = (total / project_budget) * 100.0 if project_budget > 0 else 0.0
        over = total > project_budget

        errors: list[str] = []
        warnings: list[str] = []
        if over:
            errors.append(
                f"Phase budgets ({_fmt(total)}) exceed project budget "
                f"({_fmt(project_budget)}) by {_fmt(overage)}"
            )
        elif utilization > self._config.budget_warning_threshold:
            warnings.append(
                f"Budget utilization at {utilization:.1f}% - approaching project limit"
            )

        return BudgetCheck(
            within_budget=not over,
            total_allocated=total,
            project_budget=float(project_budget),
            remaining=remaining,
            overage=overage,
            utilization=utilization,
            errors=tuple(errors),
            warnings=tuple(warnings),
        )

    def can_accommodate(
        self,
        phases: Sequence[Phase],
        project_budget: float,
        additional_hours: float,
        *,
        project: Optional[Project] = None,
    ) -> bool:
        return self.total_allocation(phases, project) + additional_hours <= project_budget

    def remaining_percentage(
        self,
        phases: Sequence[Phase],
        project_budget: float,
        *,
        project: Optional[Project] = None,
    ) -> float:
        if project_budget <= 0:
            return 0.0
        remaining = project_budget - self.total_allocation(phases, project)
        return max(0.0, remaining / project_budget * 100.0)

    def suggest_phase_budget(
        self,
        phases: Sequence[Phase],
        project_budget: float,
        *,
        project: Optional[Project] = None,
    ) -> float:
        """Half the budget for a first phase, else min(average phase, remaining)."""
        total = self.total_allocation(phases, project)
        remaining = project_budget - total
        if remaining <= 0:
            return 0.0
        if not phases:
            return float(round(project_budget / 2))
        return float(min(round(total / len(phases)), round(remaining)))

    # ── dates ────────────────────────────────────────────────────────────

    def check_date_containment(
        self, phases: Sequence[Phase], project: Project
    ) -> ContainmentResult:
        violations: list[DateViolation] = []
        limited = project.is_time_limited

        for phase in phases:
            if not isinstance(phase, ExplicitPhase):
                continue
            if phase.start_date < project.start_date:
                violations.append(self._violation(
                    phase, "start", phase.start_date, project.start_date, "before project start"
                ))
            if limited and phase.start_date > project.end_date:
                violations.append(self._violation(
                    phase, "start", phase.start_date, project.end_date, "after project end"
                ))
            if phase.end_date < project.start_date:
                violations.append(self._violation(
                    phase, "end", phase.end_date, project.start_date, "before project start"
                ))
            if limited and phase.end_date > project.end_date:
                violations.append(self._violation(
                    phase, "end", phase.end_date, project.end_date, "after project end"
                ))

        if violations:
            logger.debug(
                "Project %s: %d phase date violations", project.id, len(violations)
            )
        return ContainmentResult(
            valid=not violations,
            violations=tuple(violations),
            suggested_range=self.suggest_project_range(phases, project),
        )

    def suggest_project_range(
        self, phases: Sequence[Phase], project: Project
    ) -> Optional[DateRange]:
        """
        Minimal range holding the project and all explicit phases, or None when
        the project already holds them.  Continuous projects keep no end.
        """
        explicit = [p for p in phases if isinstance(p, ExplicitPhase)]
        if not explicit:
            return None

        start = min([project.start_date] + [p.start_date for p in explicit])
        if project.is_time_limited:
            end = max([project.end_date] + [p.end_date for p in explicit])
            if start == project.start_date and end == project.end_date:
                return None
            return DateRange(start, end)

        if start == project.start_date:
            return None
        return DateRange(start, None)

    @staticmethod
    def phase_coverage_days(phases: Sequence[Phase]) -> Optional[int]:
        explicit = [p for p in phases if isinstance(p, ExplicitPhase)]
        if not explicit:
            return None
        start = min(p.start_date for p in explicit)
        end = max(p.end_date for p in explicit)
        return (end - start).days + 1

    @staticmethod
    def _violation(
        phase: ExplicitPhase,
        boundary: Literal["start", "end"],
        phase_date: date,
        project_date: date,
        what: str,
    ) -> DateViolation:
        verb = "starts" if boundary == "start" else "ends"
        return DateViolation(
            phase_id=phase.id,
            phase_name=phase.name,
            boundary=boundary,
            phase_date=phase_date,
            project_date=project_date,
            message=(
                f'Phase "{phase.name}" {verb} ({phase_date.isoformat()}) '
                f"{what} ({project_date.isoformat()})"
            ),
        )
