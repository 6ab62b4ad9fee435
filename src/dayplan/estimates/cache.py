from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date
from typing import Hashable, Iterable, Optional, Sequence

from dayplan.phases import CalculationWindow, Phase, Project

from .models import CalendarEvent, DayEstimate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CacheKey:
    project_id: str
    project: Project
    phases: tuple
    window_start: Optional[date]
    window_end: Optional[date]
    today: Optional[date]
    calendar: Hashable
    events: tuple


@dataclass(frozen=True, slots=True)
class CacheStats:
    hits: int
    misses: int
    size: int

    @property
    def hit_rate(self) -> float:
        checks = self.hits + self.misses
        return self.hits / checks if checks else 0.0


class EstimateCache:
    """
    Memoises day estimates by content, not by object identity.

    Keys hold the input values themselves (all frozen and hashable), so a
    changed project, phase, event or holiday can never be served an old result.
    ``invalidate`` drops every entry of a project; when full, the oldest
    entry goes first.
    """

    def __init__(self, max_entries: int = 256) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1.")
        self._max_entries = max_entries
        self._entries: OrderedDict[CacheKey, tuple[DayEstimate, ...]] = OrderedDict()
        self._hits = 0
        self._misses = 0

    @staticmethod
    def key(
        project: Project,
        phases: Sequence[Phase],
        window: Optional[CalculationWindow],
        today: Optional[date],
        calendar_fingerprint: Hashable,
        events: Iterable[CalendarEvent],
    ) -> CacheKey:
        relevant = sorted(
            (ev for ev in events if ev.project_id == project.id),
            key=lambda ev: (ev.start, ev.id),
        )
        return CacheKey(
            project_id=project.id,
            project=project,
            phases=tuple(phases),
            window_start=window.start if window else None,
            window_end=window.end if window else None,
            today=today,
            calendar=calendar_fingerprint,
            events=tuple(relevant),
        )

    def get(self, key: CacheKey) -> Optional[list[DayEstimate]]:
        hit = self._entries.get(key)
        if hit is None:
            self._misses += 1
            return None
        self._hits += 1
        self._entries.move_to_end(key)
        logger.debug("Estimate cache hit for project %s", key.project_id)
        return list(hit)

    def put(self, key: CacheKey, estimates: Sequence[DayEstimate]) -> None:
        self._entries[key] = tuple(estimates)
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)

    def invalidate(self, project_id: str) -> int:
        stale = [k for k in self._entries if k.project_id == project_id]
        for k in stale:
            del self._entries[k]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()
        self._hits = 0
        self._misses = 0

    @property
    def stats(self) -> CacheStats:
        return CacheStats(self._hits, self._misses, len(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return (
            f"EstimateCache(max_entries={self._max_entries}, "
            f"size={len(self._entries)}, hits={self._hits}, misses={self._misses})"
        )
