from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
from typing import Any

import numpy as np

from airbuddy_plot.adapters.normalize import align_to, coerce_numeric, coerce_timestamps
from airbuddy_plot.series import Sample, Series
from airbuddy_plot.window import Window


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilteredSeries:
    series: tuple[Series, ...]
    reading_timestamps: tuple[int, ...]

    @property
    def is_empty(self) -> bool:
        return not self.reading_timestamps


def filter_series(timestamps: Any, values_by_name: Mapping[str, Any], window: Window) -> FilteredSeries:
    """Project parallel arrays onto per-series samples inside ``window``.

    Non-finite timestamps and values are dropped silently. An index counts as
    a reading time when any series has a finite value there, so gap detection
    does not depend on which metric is plotted.
    """
    ts = coerce_timestamps(timestamps)
    in_window = np.isfinite(ts) & (ts >= window.cutoff) & (ts <= window.latest)
    any_reading = np.zeros(ts.size, dtype=bool)

    out: list[Series] = []
    for name, raw in values_by_name.items():
        values = align_to(coerce_numeric(raw, label=f"values[{name}]"), ts.size)
        mask = in_window & np.isfinite(values)
        any_reading |= mask
        dropped = int(np.count_nonzero(in_window & ~np.isfinite(values)))
        if dropped:
            LOGGER.debug("series %r: dropped %d missing or non-finite values in window", name, dropped)
        out.append(Series(name=str(name), points=_ordered_points(ts[mask], values[mask])))

    outside = int(np.count_nonzero(~in_window))
    if outside:
        LOGGER.debug("dropped %d timestamps outside window [%d, %d] or non-finite", outside, window.cutoff, window.latest)

    readings = np.sort(ts[any_reading], kind="stable")
    return FilteredSeries(
        series=tuple(out),
        reading_timestamps=tuple(int(t) for t in readings.tolist()),
    )


def _ordered_points(ts: np.ndarray, values: np.ndarray) -> tuple[Sample, ...]:
    if ts.size == 0:
        return ()
    order = np.argsort(ts, kind="stable")
    points: list[Sample] = []
    for t, v in zip(ts[order].tolist(), values[order].tolist(), strict=True):
        sample = Sample(t=int(t), v=float(v))
        # Duplicate timestamps: the later entry in input order wins.
        if points and points[-1].t == sample.t:
            points[-1] = sample
        else:
            points.append(sample)
    return tuple(points)
