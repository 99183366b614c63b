from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from airbuddy_plot.raster.canvas import draw_pixel
from airbuddy_plot.series import RGBA


def draw_polyline(dst: np.ndarray, points: Sequence[tuple[float, float]], color: RGBA, width: int = 1) -> None:
    """Stroke consecutive points; fewer than two points draws nothing."""
    if len(points) < 2:
        return
    pixels = [(int(round(x)), int(round(y))) for x, y in points]
    for (x0, y0), (x1, y1) in zip(pixels, pixels[1:]):
        _draw_line_segment(dst, x0, y0, x1, y1, color=color, width=width)


def _draw_line_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    visited: set[tuple[int, int]] = set()

    while True:
        _stamp_brush(dst, x0, y0, color, width, visited)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _stamp_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int, visited: set[tuple[int, int]]) -> None:
    # Translucent colours must not darken where brush squares overlap.
    radius = max(0, (width - 1) // 2)
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            if (xx, yy) in visited:
                continue
            visited.add((xx, yy))
            draw_pixel(dst, xx, yy, color)
