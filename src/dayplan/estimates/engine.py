from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Sequence

from dayplan.calendar import WorkingCalendar
from dayplan.config import EngineConfig
from dayplan.phases import CalculationWindow, Phase, PhaseResolver, Project
from dayplan.recurrence import RecurrenceExpander

from .cache import EstimateCache
from .calculator import DayEstimateCalculator
from .models import CalendarEvent, DayEstimate

logger = logging.getLogger(__name__)


class EstimateEngine:
    """
    Resolve phases, then calculate day estimates, optionally memoised.

    The visible range is widened by ``config.window_buffer_days`` on both
    sides before anything is computed.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        cache: EstimateCache | None = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._expander = RecurrenceExpander(self._config.recurrence_fallback_limit)
        self._resolver = PhaseResolver(self._expander, self._config)
        self._calculator = DayEstimateCalculator()
        self._cache = cache

    @classmethod
    def with_cache(cls, config: EngineConfig | None = None) -> EstimateEngine:
        config = config or EngineConfig()
        return cls(config, EstimateCache(config.cache_max_entries))

    def window_for(
        self,
        visible_start: Optional[date],
        visible_end: Optional[date],
    ) -> Optional[CalculationWindow]:
        if visible_start is None or visible_end is None:
            return None
        return CalculationWindow.around(
            visible_start, visible_end, self._config.window_buffer_days
        )

    def estimate(
        self,
        project: Project,
        phases: Sequence[Phase],
        calendar: WorkingCalendar,
        events: Iterable[CalendarEvent] = (),
        *,
        today: date,
        visible_start: Optional[date] = None,
        visible_end: Optional[date] = None,
    ) -> list[DayEstimate]:
        events = list(events)
        window = self.window_for(visible_start, visible_end)

        key = None
        if self._cache is not None:
            key = EstimateCache.key(
                project, phases, window, today, calendar.fingerprint, events
            )
            cached = self._cache.get(key)
            if cached is not None:
                return cached

        resolved = self._resolver.resolve(
            project,
            phases,
            window.start if window else None,
            window.end if window else None,
            today=today,
        )
        estimates = self._calculator.calculate(
            project, resolved, calendar, events,
            today=today, window=window, has_phases=bool(phases),
        )

        if key is not None:
            self._cache.put(key, estimates)
        return estimates

    def invalidate(self, project_id: str) -> None:
        if self._cache is not None:
            dropped = self._cache.invalidate(project_id)
            logger.debug("Dropped %d cached results for project %s", dropped, project_id)

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def resolver(self) -> PhaseResolver:
        return self._resolver

    @property
    def cache(self) -> EstimateCache | None:
        return self._cache
