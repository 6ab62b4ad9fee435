from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """
    Tunables shared by the resolver, calculator, budget checks and cache.

    window_buffer_days           Days added on each side of a visible range.
    default_window_back_days     History kept when no window is supplied.
    default_window_forward_days  Look-ahead used when no window is supplied.
    recurrence_fallback_limit    K for the first-K fallback; 0 disables it.
    budget_warning_threshold     Utilization percentage that triggers a warning.
    cache_max_entries            Capacity of an EstimateCache built from this config.
    """

    window_buffer_days: int = 30
    default_window_back_days: int = 30
    default_window_forward_days: int = 90
    recurrence_fallback_limit: int = 100
    budget_warning_threshold: float = 90.0
    cache_max_entries: int = 256

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if value < 0:
                raise ValueError(f"{f.name} must be non-negative; got {value}.")

    @classmethod
    def from_env(
        cls,
        prefix: str = "DAYPLAN_",
        dotenv_path: str | Path | None = None,
    ) -> "EngineConfig":
        # Values already present in the environment win over the .env file.
        load_dotenv(dotenv_path=dotenv_path)

        overrides: dict[str, int | float] = {}
        for f in fields(cls):
            name = f"{prefix}{f.name.upper()}"
            raw = os.getenv(name)
            if raw is None or raw.strip() == "":
                continue
            cast = float if f.type in ("float", float) else int
            try:
                overrides[f.name] = cast(raw)
            except ValueError as exc:
                raise ValueError(f"{name} must be a {cast.__name__}; got {raw!r}.") from exc
        return cls(**overrides)
