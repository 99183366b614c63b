from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

import numpy as np
from PIL import Image

from airbuddy_plot.planner import DrawPlan
from airbuddy_plot.raster import (
    draw_dashed_vline,
    draw_hline,
    draw_markers,
    draw_polyline,
    draw_text,
    draw_vline,
    new_canvas,
    text_size,
)
from airbuddy_plot.series import RGBA


LOGGER = logging.getLogger(__name__)

GAP_LABEL = "stopped"


@dataclass(frozen=True)
class RenderTheme:
    background: RGBA = (255, 255, 255, 255)
    grid_color: RGBA = (238, 238, 238, 255)
    axis_color: RGBA = (204, 204, 204, 255)
    y_label_color: RGBA = (102, 102, 102, 255)
    x_label_color: RGBA = (119, 119, 119, 255)
    gap_line_color: RGBA = (0, 0, 0, 38)
    gap_label_color: RGBA = (0, 0, 0, 89)
    message_color: RGBA = (102, 102, 102, 255)
    font_family: str = "Mulish"
    font_size_px: float = 12.0
    gap_font_size_px: float = 11.0


LIGHT_THEME = RenderTheme()
DARK_THEME = RenderTheme(
    background=(20, 26, 36, 255),
    grid_color=(44, 53, 66, 255),
    axis_color=(124, 138, 156, 255),
    y_label_color=(208, 218, 232, 255),
    x_label_color=(186, 201, 220, 255),
    gap_line_color=(255, 255, 255, 46),
    gap_label_color=(255, 255, 255, 110),
    message_color=(208, 218, 232, 255),
)
THEMES = {"light": LIGHT_THEME, "dark": DARK_THEME}


def render_plan(plan: DrawPlan, theme: RenderTheme = LIGHT_THEME) -> np.ndarray:
    """Rasterize a draw plan to an (H, W, 4) uint8 RGBA array."""
    canvas = new_canvas(plan.width, plan.height, theme.background)
    text_kw = {"font_family": theme.font_family, "font_size_px": theme.font_size_px}

    if plan.is_empty or plan.mapping is None:
        if plan.message:
            draw_text(canvas, 10, 8, plan.message, theme.message_color, **text_kw)
        return canvas

    rect = plan.rect
    left = rect.x
    right = rect.x + rect.width
    top = rect.y
    bottom = rect.y + rect.height

    for label in plan.y_labels:
        draw_hline(canvas, left, right, int(round(label.y)), theme.grid_color)
    draw_vline(canvas, left, top, bottom, theme.axis_color)
    draw_hline(canvas, left, right, bottom, theme.axis_color)

    for label in plan.y_labels:
        _, h = text_size(label.text, **text_kw)
        draw_text(canvas, 8, label.y - h / 2, label.text, theme.y_label_color, **text_kw)

    for label in plan.x_labels:
        w, _ = text_size(label.text, **text_kw)
        if label.anchor == "middle":
            x = label.x - w / 2
        elif label.anchor == "end":
            x = label.x - w
        else:
            x = label.x
        x = min(max(0.0, x), max(0.0, float(plan.width - w)))
        draw_text(canvas, x, bottom + 13, label.text, theme.x_label_color, **text_kw)

    gap_kw = {"font_family": theme.font_family, "font_size_px": theme.gap_font_size_px}
    for marker in plan.gap_markers:
        x = int(round(plan.mapping.time_to_x(marker.at)))
        draw_dashed_vline(canvas, x, top, bottom, theme.gap_line_color)
        _, h = text_size(GAP_LABEL, **gap_kw)
        draw_text(canvas, x + 4, bottom - 6 - h, GAP_LABEL, theme.gap_label_color, **gap_kw)

    for series in plan.series:
        style = series.style
        for segment in series.segments:
            xy = [(plan.mapping.time_to_x(p.t), plan.mapping.value_to_y(p.v)) for p in segment.points]
            draw_polyline(canvas, xy, style.color, width=style.width)
        markers = [(plan.mapping.time_to_x(p.t), plan.mapping.value_to_y(p.v)) for p in series.points]
        draw_markers(canvas, markers, style.color, radius=style.point_radius)

    for entry in plan.legend:
        w, _ = text_size(entry.label, **text_kw)
        draw_text(canvas, entry.x - w, entry.y, entry.label, entry.color, **text_kw)

    return canvas


def save_png(plan: DrawPlan, path: str | Path, theme: RenderTheme = LIGHT_THEME) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(render_plan(plan, theme)).save(out, format="PNG")
    LOGGER.info("wrote chart %dx%d to %s", plan.width, plan.height, out)
    return out
