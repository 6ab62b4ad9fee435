"""
dayplan.estimates
~~~~~~~~~~~~~~~~~

Day-by-day hour estimates.  For each (project, date) the calculator emits at
most one DayEstimate, taken from logged events first, then from phase
allocations, then from the project budget when the project has no phases.

Basic usage::

    from datetime import date
    from dayplan.calendar import WeeklyTemplate, WorkingCalendar
    from dayplan.estimates import EstimateEngine
    from dayplan.phases import ExplicitPhase, Project

    cal = WorkingCalendar(WeeklyTemplate.standard(8.0))
    project = Project("p1", "Website Redesign", date(2026, 2, 1), date(2026, 2, 28), 40.0)
    phase = ExplicitPhase("ph1", "p1", "Build", date(2026, 2, 1), date(2026, 2, 28), 40.0)

    engine = EstimateEngine.with_cache()
    estimates = engine.estimate(project, [phase], cal, [], today=date(2026, 1, 15))
    # → 20 phase-allocation entries of 2.0h, one per weekday of February 2026

Public API
----------
DayEstimateCalculator     Core calculation over resolved phases.
EstimateEngine            Resolver + calculator + optional cache.
EstimateCache             Content-keyed memoisation of results.
DayEstimate               One (project, date) → hours record.
EstimateSource            event / phase-allocation / project-auto-estimate.
CalendarEvent             A logged or planned block of time.
EventCategory             planned / completed / habit / task.
EstimateComputationError  Raised when input data is malformed.
aggregate_by_date         Group estimates by date.
total_hours               Sum of estimate hours.
"""

from __future__ import annotations

from dayplan.estimates._exceptions import EstimateComputationError
from dayplan.estimates.cache import CacheKey, CacheStats, EstimateCache
from dayplan.estimates.calculator import DayEstimateCalculator, aggregate_by_date, total_hours
from dayplan.estimates.engine import EstimateEngine
from dayplan.estimates.models import CalendarEvent, DayEstimate, EstimateSource, EventCategory

__all__ = [
    "DayEstimateCalculator",
    "EstimateEngine",
    "EstimateCache",
    "CacheKey",
    "CacheStats",
    "DayEstimate",
    "EstimateSource",
    "CalendarEvent",
    "EventCategory",
    "EstimateComputationError",
    "aggregate_by_date",
    "total_hours",
]
