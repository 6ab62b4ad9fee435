"""
dayplan.phases
~~~~~~~~~~~~~~

Projects, their phases, and the PhaseResolver that turns explicit and
recurring phases into a uniform list of time-bounded allocations.

Recurring phases of a continuous project are only expanded inside a bounded
calculation window, so the cost follows what is visible rather than the
project's lifetime.

Basic usage::

    from datetime import date
    from dayplan.phases import CalculationWindow, PhaseResolver, Project, RecurringPhase
    from dayplan.recurrence import RecurrenceRule, RecurrenceType

    project = Project("p1", "Support", start_date=date(2025, 1, 6))     # continuous
    weekly = RecurringPhase(
        "ph1", "p1", "Weekly sync",
        RecurrenceRule(RecurrenceType.WEEKLY, anchor=date(2025, 1, 6), weekday=0),
        hours_per_occurrence=4.0,
    )
    window = CalculationWindow.around(date(2026, 3, 1), date(2026, 3, 31), buffer_days=0)
    PhaseResolver().resolve(project, [weekly], window.start, window.end)

Public API
----------
Project            Project record (continuous or time-limited).
ExplicitPhase      Fixed date range with a total allocation.
RecurringPhase     Recurrence rule with an allocation per occurrence.
Phase              Union of the two phase kinds.
PhaseAllocation    Resolved allocation consumed by the estimate calculator.
CalculationWindow  Bounded date range for computation.
PhaseResolver      The resolver.
"""

from __future__ import annotations

from dayplan.phases.models import ExplicitPhase, Phase, Project, RecurringPhase
from dayplan.phases.resolver import PhaseAllocation, PhaseResolver
from dayplan.phases.window import CalculationWindow

__all__ = [
    "Project",
    "ExplicitPhase",
    "RecurringPhase",
    "Phase",
    "PhaseAllocation",
    "PhaseResolver",
    "CalculationWindow",
]
