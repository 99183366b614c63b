from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
from typing import Any

import numpy as np

from airbuddy_plot.adapters.normalize import coerce_timestamps


LOGGER = logging.getLogger(__name__)

DEFAULT_RANGE_KEY = "24h"
DEFAULT_RANGE_HOURS = 24
DEFAULT_RANGES_HOURS: Mapping[str, float] = {
    "1h": 1,
    "6h": 6,
    "24h": 24,
    "72h": 72,
    "7d": 24 * 7,
    "30d": 24 * 30,
}


@dataclass(frozen=True)
class Window:
    cutoff: int
    latest: int

    def __post_init__(self) -> None:
        if self.cutoff > self.latest:
            raise ValueError("window cutoff must be <= latest")

    @property
    def span(self) -> int:
        return self.latest - self.cutoff

    def contains(self, t: float) -> bool:
        return self.cutoff <= t <= self.latest


def resolve_range_hours(range_key: str | None, range_table: Mapping[str, float] | None = None) -> float:
    table = DEFAULT_RANGES_HOURS if range_table is None else range_table
    if range_key is not None and range_key in table:
        return float(table[range_key])
    LOGGER.warning("unknown range key %r; falling back to %d hours", range_key, DEFAULT_RANGE_HOURS)
    return float(DEFAULT_RANGE_HOURS)


def select_window(
    all_timestamps: Any,
    range_key: str | None = DEFAULT_RANGE_KEY,
    range_table: Mapping[str, float] | None = None,
) -> Window | None:
    """Visible window ending at the latest observed sample.

    The window is anchored to the newest finite timestamp rather than the
    wall clock, so a device that stopped reporting days ago still shows its
    last stretch of real data. Returns ``None`` when no finite timestamp
    exists; callers render a no-data state instead of a chart.
    """
    ts = coerce_timestamps(all_timestamps)
    finite = ts[np.isfinite(ts)]
    if finite.size == 0:
        return None
    latest = int(np.max(finite))
    hours = resolve_range_hours(range_key, range_table)
    cutoff = latest - int(round(hours * 3600))
    return Window(cutoff=min(cutoff, latest), latest=latest)
