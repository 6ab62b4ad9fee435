class RecurrenceError(ValueError):
    """Raised when a recurrence rule cannot be expanded."""
