from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from dayplan.calendar import CalendarError, Holiday, WeeklyTemplate, WorkSlot
from dayplan.calendar.slots import WEEKDAY_NAMES, parse_minutes
from dayplan.phases import ExplicitPhase, Phase, Project, RecurringPhase
from dayplan.recurrence import MonthlyPattern, RecurrenceRule, RecurrenceType

_MAX_HOLIDAY_DAYS = 365


@dataclass(frozen=True, slots=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True, slots=True)
class ValidationResult:
    errors: tuple[FieldError, ...] = ()
    warnings: tuple[FieldError, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def messages_for(self, field: str) -> list[str]:
        return [e.message for e in self.errors if e.field == field]

    def merge(self, other: ValidationResult) -> ValidationResult:
        return ValidationResult(self.errors + other.errors, self.warnings + other.warnings)


class _Collector:
    def __init__(self) -> None:
        self.errors: list[FieldError] = []
        self.warnings: list[FieldError] = []

    def error(self, field: str, message: str) -> None:
        self.errors.append(FieldError(field, message))

    def warn(self, field: str, message: str) -> None:
        self.warnings.append(FieldError(field, message))

    def extend(self, result: ValidationResult, prefix: str = "") -> None:
        self.errors.extend(FieldError(prefix + e.field, e.message) for e in result.errors)
        self.warnings.extend(FieldError(prefix + w.field, w.message) for w in result.warnings)

    def result(self) -> ValidationResult:
        return ValidationResult(tuple(self.errors), tuple(self.warnings))


# ── work slots ───────────────────────────────────────────────────────────

def validate_work_slot(start: str, end: str) -> ValidationResult:
    out = _Collector()
    minutes: dict[str, int] = {}
    for name, value in (("start", start), ("end", end)):
        if value is None:
            out.error(name, "Time is required")
            continue
        if not isinstance(value, str):
            out.error(name, f"Time must be in 24-hour HH:MM format; got {value!r}")
            continue
        try:
            minutes[name] = parse_minutes(value)
        except CalendarError:
            out.error(name, f"Time must be in 24-hour HH:MM format; got {value!r}")
    if len(minutes) == 2:
        if minutes["end"] < minutes["start"]:
            out.error("end", "Work slots cannot cross midnight (must be within a single day)")
        elif minutes["end"] == minutes["start"]:
            out.error("end", "End time must be after start time")
    return out.result()


def validate_day_slots(slots: Sequence[WorkSlot]) -> ValidationResult:
    out = _Collector()
    valid: list[WorkSlot] = []
    for i, slot in enumerate(slots):
        result = validate_work_slot(slot.start, slot.end)
        out.extend(result, prefix=f"slots[{i}].")
        if result.is_valid:
            valid.append(slot)

    for i, a in enumerate(valid):
        for b in valid[i + 1:]:
            if a.overlaps(b):
                out.error(
                    "slots",
                    f"Work slots overlap: {a.start}-{a.end} and {b.start}-{b.end}",
                )
    return out.result()


def validate_weekly_template(template: WeeklyTemplate) -> ValidationResult:
    out = _Collector()
    for day, slots in enumerate(template.slots):
        out.extend(validate_day_slots(slots), prefix=f"{WEEKDAY_NAMES[day]}.")
    if out.errors:
        return out.result()
    if template.weekly_hours == 0:
        out.warn("template", "No working hours configured; nothing can be scheduled")
    return out.result()


# ── holidays / projects ──────────────────────────────────────────────────

def validate_holiday(holiday: Holiday) -> ValidationResult:
    out = _Collector()
    if not (holiday.name or "").strip():
        out.error("name", "Holiday name is required")
    if holiday.start is None:
        out.error("start", "Start date is required")
    if holiday.end is None:
        out.error("end", "End date is required")
    if out.errors:
        return out.result()

    if holiday.start > holiday.end:
        out.error("end", "Start date must be before or equal to end date")
    elif holiday.length > _MAX_HOLIDAY_DAYS:
        out.warn("end", "Holiday duration exceeds 1 year - this may be unintentional")
    return out.result()


def validate_project(project: Project) -> ValidationResult:
    out = _Collector()
    if not (project.name or "").strip():
        out.error("name", "Project name is required")
    if project.start_date is None:
        out.error("start_date", "Start date is required")
    if project.estimated_hours is None:
        out.error("estimated_hours", "Estimated hours are required")
    elif project.estimated_hours < 0:
        out.error("estimated_hours", "Estimated hours cannot be negative")
    if not project.continuous:
        if project.end_date is None:
            out.error("end_date", "A time-limited project needs an end date")
        elif project.start_date is not None and project.end_date < project.start_date:
            out.error("end_date", "Project end date must be on or after its start date")
    return out.result()


# ── recurrence / phases ──────────────────────────────────────────────────

def _in(value: Optional[int], lo: int, hi: int) -> bool:
    return value is not None and lo <= value <= hi


def validate_recurrence_rule(rule: RecurrenceRule) -> ValidationResult:
    out = _Collector()
    try:
        kind = RecurrenceType(rule.type)
    except ValueError:
        out.error("type", f"Invalid recurrence type: {rule.type!r}. "
                          "Must be daily, weekly, monthly or yearly")
        kind = None

    if rule.anchor is None:
        out.error("anchor", "Recurrence needs a start date")
    if rule.interval is None or rule.interval < 1:
        out.error("interval", "Recurrence interval must be at least 1")

    if rule.weekday is not None and not _in(rule.weekday, 0, 6):
        out.error("weekday", "Day of week must be between 0 (Monday) and 6 (Sunday)")

    pattern: Optional[MonthlyPattern] = None
    if kind is RecurrenceType.MONTHLY and rule.monthly_pattern is not None:
        try:
            pattern = MonthlyPattern(rule.monthly_pattern)
        except ValueError:
            out.error("monthly_pattern", "Monthly pattern must be 'date' or 'day_of_week'")

    if pattern is not None:
        if pattern is MonthlyPattern.DATE:
            if rule.month_day is None:
                out.error("month_day", "Monthly date pattern must specify a date (1-31)")
            elif not _in(rule.month_day, 1, 31):
                out.error("month_day", "Monthly date must be between 1 and 31")
            elif rule.month_day > 28:
                out.warn("month_day", f"Months without a day {rule.month_day} are skipped")
        else:
            if rule.weekday is None:
                out.error("weekday", "Monthly day-of-week pattern must specify a day of week")
            if rule.week_of_month is None:
                out.error("week_of_month", "Monthly day-of-week pattern must specify a week")
            elif rule.week_of_month not in (1, 2, 3, 4, -1):
                out.error("week_of_month", "Week of month must be between 1 and 4, or last")

    if kind is RecurrenceType.YEARLY and rule.month is not None and not _in(rule.month, 1, 12):
        out.error("month", "Month must be between 1 and 12")
    if rule.month is not None and kind is not RecurrenceType.YEARLY:
        out.warn("month", "Month of year is only used by yearly recurrence")
    return out.result()


def validate_phase(phase: Phase, project: Optional[Project] = None) -> ValidationResult:
    out = _Collector()
    if not (phase.name or "").strip():
        out.error("name", "Phase name is required")
    if project is not None and phase.project_id != project.id:
        out.error("project_id", "Phase belongs to a different project")

    if isinstance(phase, ExplicitPhase):
        _check_hours(out, "hours", phase.hours)
        if phase.start_date is None or phase.end_date is None:
            if phase.start_date is None:
                out.error("start_date", "Start date is required")
            if phase.end_date is None:
                out.error("end_date", "End date is required")
        elif phase.end_date < phase.start_date:
            out.error("end_date", "Phase start date must be on or before its end date")
        elif project is not None:
            if project.start_date is not None and phase.start_date < project.start_date:
                out.error("start_date", "Phase cannot start before the project starts")
            if project.is_time_limited and phase.end_date > project.end_date:
                out.error("end_date", "Phase cannot end after the project ends")

    elif isinstance(phase, RecurringPhase):
        _check_hours(out, "hours_per_occurrence", phase.hours_per_occurrence)
        if phase.rule is None:
            out.error("rule", "Recurring phase must have a recurrence configuration")
        else:
            out.extend(validate_recurrence_rule(phase.rule), prefix="rule.")
            if (
                project is not None
                and project.is_time_limited
                and phase.rule.anchor is not None
                and phase.rule.anchor > project.end_date
            ):
                out.error("rule.anchor", "Recurrence starts after the project ends")
    else:
        out.error("kind", f"Unsupported phase type: {type(phase).__name__}")
    return out.result()


def validate_phases(
    phases: Iterable[Phase], project: Optional[Project] = None
) -> dict[str, ValidationResult]:
    """Per-phase results keyed by phase id; only phases with findings appear."""
    results: dict[str, ValidationResult] = {}
    for phase in phases:
        result = validate_phase(phase, project)
        if result.errors or result.warnings:
            results[phase.id] = result
    return results


def _check_hours(out: _Collector, field: str, hours: float) -> None:
    if hours is None:
        out.error(field, "Hours are required")
    elif hours < 0:
        out.error(field, "Hours cannot be negative")
    elif hours == 0:
        out.warn(field, "Zero hours allocated; this phase will not produce any work")
