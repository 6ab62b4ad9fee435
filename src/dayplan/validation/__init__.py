"""
dayplan.validation
~~~~~~~~~~~~~~~~~~

Field-level validation run before records reach the engine.  Validators never
raise: they return a ValidationResult whose errors block a save and whose
warnings are shown without blocking.

Basic usage::

    from dayplan.validation import validate_work_slot

    result = validate_work_slot("22:00", "02:00")
    result.is_valid              # → False
    result.messages_for("end")   # → ["Work slots cannot cross midnight (must be within a single day)"]

Public API
----------
ValidationResult          Errors and warnings, each a FieldError.
FieldError                A message attached to a field name.
validate_work_slot        One HH:MM–HH:MM slot.
validate_day_slots        Slots of one day, including overlaps.
validate_weekly_template  Every day of a WeeklyTemplate.
validate_holiday          A holiday range.
validate_project          A project record.
validate_recurrence_rule  A recurrence rule.
validate_phase            An explicit or recurring phase, optionally against its project.
validate_phases           Several phases at once.
"""

from __future__ import annotations

from dayplan.validation.rules import (
    FieldError,
    ValidationResult,
    validate_day_slots,
    validate_holiday,
    validate_phase,
    validate_phases,
    validate_project,
    validate_recurrence_rule,
    validate_weekly_template,
    validate_work_slot,
)

__all__ = [
    "ValidationResult",
    "FieldError",
    "validate_work_slot",
    "validate_day_slots",
    "validate_weekly_template",
    "validate_holiday",
    "validate_project",
    "validate_recurrence_rule",
    "validate_phase",
    "validate_phases",
]
