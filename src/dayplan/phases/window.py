from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional


@dataclass(frozen=True, slots=True)
class CalculationWindow:
    """Inclusive date range over which estimates are actually computed."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(
                f"Window ends ({self.end}) before it starts ({self.start})."
            )

    @classmethod
    def around(
        cls, visible_start: date, visible_end: date, buffer_days: int = 30
    ) -> CalculationWindow:
        pad = timedelta(days=buffer_days)
        return cls(visible_start - pad, visible_end + pad)

    @classmethod
    def default(
        cls, today: date, back_days: int = 30, forward_days: int = 90
    ) -> CalculationWindow:
        return cls(today - timedelta(days=back_days), today + timedelta(days=forward_days))

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end

    def clip(self, start: date, end: date) -> Optional[tuple[date, date]]:
        """Intersection with ``start..end``, or None when they do not meet."""
        lo, hi = max(start, self.start), min(end, self.end)
        return (lo, hi) if lo <= hi else None

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1
