from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from airbuddy_plot.raster.canvas import blend
from airbuddy_plot.series import RGBA


def draw_markers(dst: np.ndarray, points: Sequence[tuple[float, float]], color: RGBA, radius: int = 3) -> None:
    if radius <= 0:
        return
    for x, y in points:
        _draw_disc(dst, float(x), float(y), color=color, radius=radius)


def _draw_disc(dst: np.ndarray, cx: float, cy: float, color: RGBA, radius: int) -> None:
    x0 = max(0, int(np.floor(cx - radius)))
    x1 = min(dst.shape[1], int(np.ceil(cx + radius)) + 1)
    y0 = max(0, int(np.floor(cy - radius)))
    y1 = min(dst.shape[0], int(np.ceil(cy + radius)) + 1)
    if x0 >= x1 or y0 >= y1:
        return
    yy, xx = np.mgrid[y0:y1, x0:x1]
    inside = (xx - cx) ** 2 + (yy - cy) ** 2 <= radius * radius
    if not np.any(inside):
        return
    blend(dst[y0:y1, x0:x1], color, inside.astype(np.float32))
