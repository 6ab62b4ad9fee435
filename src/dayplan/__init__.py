"""
dayplan
~~~~~~~

Working-day aware hour estimates for projects.

Sub-packages
------------
calendar     Weekly work-hour templates, holidays and the WorkingCalendar.
recurrence   Recurrence rules and their bounded expansion.
phases       Projects, explicit/recurring phases and the PhaseResolver.
estimates    Logged events, DayEstimate records, the calculator and engine.
budget       Budget and date-containment checks between phases and projects.
validation   Field-level validation of user input before it reaches the engine.
"""

__version__ = "0.1.0"
