from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from airbuddy_plot.config import ChartConfig
from airbuddy_plot.filtering import filter_series
from airbuddy_plot.hover import DEFAULT_MAX_PIXEL_DISTANCE, HoverHit, nearest
from airbuddy_plot.planner import DrawPlan, TimeFormatter, ValueFormatter, plan
from airbuddy_plot.series import Series
from airbuddy_plot.window import select_window


LOGGER = logging.getLogger(__name__)


def plan_chart(
    timestamps: Any,
    metrics: Mapping[str, Any],
    range_key: str | None = None,
    config: ChartConfig | None = None,
    *,
    time_formatter: TimeFormatter | None = None,
    y_formatter: ValueFormatter | None = None,
) -> DrawPlan:
    cfg = config or ChartConfig()
    key = cfg.default_range if range_key is None else range_key
    window = select_window(timestamps, key, cfg.ranges_hours)
    if window is None:
        return DrawPlan.empty(None, cfg)

    if cfg.series:
        values_by_name: dict[str, Any] = {}
        for series in cfg.series:
            if series.metric not in metrics:
                LOGGER.warning("metric %r for series %r not present in telemetry", series.metric, series.name)
            values_by_name[series.name] = metrics.get(series.metric, ())
    else:
        values_by_name = dict(metrics)

    filtered = filter_series(timestamps, values_by_name, window)
    if filtered.is_empty:
        return DrawPlan.empty(window, cfg)
    return plan(
        filtered.series,
        window,
        cfg,
        reading_timestamps=filtered.reading_timestamps,
        time_formatter=time_formatter,
        y_formatter=y_formatter,
    )


def hover_chart(
    draw_plan: DrawPlan,
    pointer_x: float,
    max_pixel_distance: float = DEFAULT_MAX_PIXEL_DISTANCE,
) -> HoverHit | None:
    if draw_plan.mapping is None:
        return None
    series = [Series(name=s.name, points=s.points) for s in draw_plan.series]
    return nearest(series, draw_plan.mapping.time_to_x, pointer_x, max_pixel_distance)
