from __future__ import annotations

import numpy as np

from airbuddy_plot.series import RGBA


def new_canvas(width: int, height: int, color: RGBA = (255, 255, 255, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def blend(region: np.ndarray, color: RGBA, coverage: np.ndarray | float = 1.0) -> None:
    """Source-over blend ``color`` into an (..., 4) uint8 view in place."""
    alpha = (color[3] / 255.0) * np.asarray(coverage, dtype=np.float32)
    if alpha.ndim:
        alpha = alpha[..., None]
    src = np.asarray(color[:3], dtype=np.float32)
    region[..., :3] = (src * alpha + region[..., :3].astype(np.float32) * (1.0 - alpha)).astype(np.uint8)
    region[..., 3] = 255


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    blend(dst[y, x], color)


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0]:
        return
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1] - 1, max(x0, x1))
    if xa > xb:
        return
    blend(dst[y, xa : xb + 1], color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    if x < 0 or x >= dst.shape[1]:
        return
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0] - 1, max(y0, y1))
    if ya > yb:
        return
    blend(dst[ya : yb + 1, x], color)


def draw_dashed_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA, dash: int = 4, gap: int = 4) -> None:
    if dash <= 0 or gap < 0:
        raise ValueError("dash must be > 0 and gap >= 0")
    top = min(y0, y1)
    bottom = max(y0, y1)
    y = top
    while y <= bottom:
        draw_vline(dst, x, y, min(bottom, y + dash - 1), color)
        y += dash + gap
