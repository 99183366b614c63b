from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
import math

from airbuddy_plot.series import Series


DEFAULT_MAX_PIXEL_DISTANCE = 10.0


@dataclass(frozen=True)
class HoverHit:
    series_name: str
    time: int
    value: float
    distance_px: float = 0.0


def nearest(
    series: Sequence[Series],
    time_to_x: Callable[[float], float],
    pointer_x: float,
    max_pixel_distance: float = DEFAULT_MAX_PIXEL_DISTANCE,
) -> HoverHit | None:
    """Closest sample to ``pointer_x`` by horizontal pixel distance.

    Ties go to the earlier series (then the earlier point). Returns ``None``
    when the best candidate is further than ``max_pixel_distance`` away.
    """
    if not math.isfinite(pointer_x):
        return None
    best: HoverHit | None = None
    for s in series:
        for p in s.points:
            d = abs(time_to_x(p.t) - pointer_x)
            if best is None or d < best.distance_px:
                best = HoverHit(series_name=s.name, time=p.t, value=p.v, distance_px=d)
    if best is None or best.distance_px > max_pixel_distance:
        return None
    return best
