"""
dayplan.budget
~~~~~~~~~~~~~~

Budget and date consistency between a project and its phases.  Checks are
pure: problems come back as structured results (with the exact overage or the
offending phase boundaries) and corrections are only suggested.

Basic usage::

    from datetime import date
    from dayplan.budget import BudgetSyncEngine
    from dayplan.phases import ExplicitPhase, Project

    project = Project("p1", "Website Redesign", date(2026, 2, 1), date(2026, 2, 28), 40.0)
    phases = [
        ExplicitPhase("a", "p1", "Design", date(2026, 2, 1), date(2026, 2, 13), 24.0),
        ExplicitPhase("b", "p1", "Build", date(2026, 2, 16), date(2026, 3, 6), 20.0),
    ]
    sync = BudgetSyncEngine()
    sync.check_budget(phases, project.estimated_hours).overage     # → 4.0
    sync.check_date_containment(phases, project).suggested_range   # → DateRange(2026-02-01, 2026-03-06)

Public API
----------
BudgetSyncEngine   The checks.
BudgetCheck        Result of check_budget.
ContainmentResult  Result of check_date_containment.
DateViolation      One phase boundary outside the project range.
DateRange          Suggested project range.
"""

from __future__ import annotations

from dayplan.budget.sync import (
    BudgetCheck,
    BudgetSyncEngine,
    ContainmentResult,
    DateRange,
    DateViolation,
)

__all__ = [
    "BudgetSyncEngine",
    "BudgetCheck",
    "ContainmentResult",
    "DateViolation",
    "DateRange",
]
