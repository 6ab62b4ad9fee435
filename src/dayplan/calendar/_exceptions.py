class CalendarError(ValueError):
    """Raised for an invalid work slot, template or calendar query."""
