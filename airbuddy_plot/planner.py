from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import asdict, dataclass
import math
from typing import Any, Literal

from airbuddy_plot.config import ChartConfig
from airbuddy_plot.scales import DEFAULT_BOUNDS, Bounds, format_ticks_for_axis, format_time, nice_bounds, tick_values
from airbuddy_plot.segments import build_gap_markers, build_segments
from airbuddy_plot.series import RGBA, GapMarker, Sample, Segment, Series, SeriesStyle
from airbuddy_plot.window import Window


TimeFormatter = Callable[[int], str]
ValueFormatter = Callable[[float], str]

LEGEND_RIGHT_INSET = 8
LEGEND_TOP_INSET = 6
LEGEND_ROW_HEIGHT = 14


@dataclass(frozen=True)
class PlotRect:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class AxisMapping:
    """Affine time->x and value->y mapping into the plot rectangle."""

    rect: PlotRect
    cutoff: int
    latest: int
    vmin: float
    vmax: float

    def time_to_x(self, t: float) -> float:
        span = self.latest - self.cutoff
        if span <= 0:
            return self.rect.x + self.rect.width / 2
        return self.rect.x + (t - self.cutoff) / span * self.rect.width

    def value_to_y(self, v: float) -> float:
        span = self.vmax - self.vmin
        if span <= 0:
            return self.rect.y + self.rect.height / 2
        return self.rect.y + (1.0 - (v - self.vmin) / span) * self.rect.height

    def x_to_time(self, x: float) -> float:
        if self.rect.width <= 0 or self.latest == self.cutoff:
            return float(self.latest)
        return self.cutoff + (x - self.rect.x) / self.rect.width * (self.latest - self.cutoff)


@dataclass(frozen=True)
class PlannedSeries:
    name: str
    style: SeriesStyle
    points: tuple[Sample, ...]
    segments: tuple[Segment, ...]


@dataclass(frozen=True)
class XLabel:
    t: int
    text: str
    x: float
    anchor: Literal["start", "middle", "end"]


@dataclass(frozen=True)
class YLabel:
    v: float
    text: str
    y: float


@dataclass(frozen=True)
class LegendEntry:
    label: str
    color: RGBA
    x: float
    y: float


@dataclass(frozen=True)
class DrawPlan:
    width: int
    height: int
    window: Window | None
    bounds: Bounds
    rect: PlotRect
    mapping: AxisMapping | None
    series: tuple[PlannedSeries, ...] = ()
    gap_markers: tuple[GapMarker, ...] = ()
    x_labels: tuple[XLabel, ...] = ()
    y_labels: tuple[YLabel, ...] = ()
    legend: tuple[LegendEntry, ...] = ()
    message: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.series

    @classmethod
    def empty(cls, window: Window | None, config: ChartConfig) -> "DrawPlan":
        return cls(
            width=config.width,
            height=config.height,
            window=window,
            bounds=DEFAULT_BOUNDS,
            rect=plot_rect(config),
            mapping=None,
            message=config.empty_message,
        )

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["is_empty"] = self.is_empty
        return out


def plot_rect(config: ChartConfig) -> PlotRect:
    return PlotRect(x=config.pad_left, y=config.pad_top, width=config.plot_width, height=config.plot_height)


def plan(
    series_list: Sequence[Series],
    window: Window,
    config: ChartConfig,
    *,
    reading_timestamps: Iterable[int] | None = None,
    time_formatter: TimeFormatter | None = None,
    y_formatter: ValueFormatter | None = None,
) -> DrawPlan:
    """Lay out one chart redraw.

    Every series shares one set of nice Y bounds. Lines break wherever
    consecutive samples are further apart than ``config.max_gap_seconds``;
    gap markers are derived once from the union of reading times so all
    series show the same outages. Samples with a non-finite time or value
    are skipped. When nothing is left to draw the empty sentinel plan is
    returned.
    """
    clean = [tuple(p for p in s.points if _is_finite_sample(p)) for s in series_list]
    values = [p.v for points in clean for p in points]
    if not values:
        return DrawPlan.empty(window, config)

    bounds = nice_bounds(min(values), max(values), config.tick_count)
    rect = plot_rect(config)
    mapping = AxisMapping(rect=rect, cutoff=window.cutoff, latest=window.latest, vmin=bounds.min, vmax=bounds.max)

    planned: list[PlannedSeries] = []
    for index, (series, kept) in enumerate(zip(series_list, clean, strict=True)):
        points = tuple(sorted(kept, key=lambda p: p.t))
        planned.append(
            PlannedSeries(
                name=series.name,
                style=config.style_for(series.name, index),
                points=points,
                segments=build_segments(points, config.max_gap_seconds),
            )
        )

    if reading_timestamps is None:
        readings = sorted({p.t for points in clean for p in points})
    else:
        readings = [t for t in reading_timestamps if math.isfinite(t)]
    gap_markers = build_gap_markers(readings, config.max_gap_seconds)

    return DrawPlan(
        width=config.width,
        height=config.height,
        window=window,
        bounds=bounds,
        rect=rect,
        mapping=mapping,
        series=tuple(planned),
        gap_markers=gap_markers,
        x_labels=_x_labels(window, mapping, time_formatter or format_time),
        y_labels=_y_labels(bounds, mapping, config, y_formatter),
        legend=_legend(planned, rect) if config.show_legend else (),
    )


def _x_labels(window: Window, mapping: AxisMapping, fmt: TimeFormatter) -> tuple[XLabel, ...]:
    mid = (window.cutoff + window.latest) // 2
    anchors: tuple[tuple[int, Literal["start", "middle", "end"]], ...] = (
        (window.cutoff, "start"),
        (mid, "middle"),
        (window.latest, "end"),
    )
    return tuple(XLabel(t=t, text=str(fmt(t)), x=mapping.time_to_x(t), anchor=anchor) for t, anchor in anchors)


def _y_labels(bounds: Bounds, mapping: AxisMapping, config: ChartConfig, fmt: ValueFormatter | None) -> tuple[YLabel, ...]:
    ticks = tick_values(bounds, config.y_label_count)
    if fmt is not None:
        texts = [str(fmt(v)) for v in ticks]
    elif config.y_label_format is not None:
        texts = [config.y_label_format.format(v) for v in ticks]
    else:
        texts = format_ticks_for_axis(ticks)

    rows = len(ticks) - 1
    return tuple(
        YLabel(v=v, text=text, y=mapping.rect.y + (i / rows) * mapping.rect.height)
        for i, (v, text) in enumerate(zip(ticks, texts, strict=True))
    )


def _legend(planned: Sequence[PlannedSeries], rect: PlotRect) -> tuple[LegendEntry, ...]:
    x = rect.x + rect.width - LEGEND_RIGHT_INSET
    entries: list[LegendEntry] = []
    for series in planned:
        if not series.name:
            continue
        y = rect.y + LEGEND_TOP_INSET + len(entries) * LEGEND_ROW_HEIGHT
        entries.append(LegendEntry(label=series.name, color=series.style.color, x=x, y=y))
    return tuple(entries)


def _is_finite_sample(p: Sample) -> bool:
    return math.isfinite(p.t) and math.isfinite(p.v)
