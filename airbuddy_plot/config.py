from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
import math
from pathlib import Path
import tomllib
from types import MappingProxyType
from typing import Any

from airbuddy_plot.errors import ChartConfigError
from airbuddy_plot.segments import DEFAULT_MAX_GAP_SECONDS
from airbuddy_plot.series import RGBA, SeriesStyle
from airbuddy_plot.window import DEFAULT_RANGE_KEY, DEFAULT_RANGES_HOURS


ColorLike = str | tuple[int, int, int] | tuple[int, int, int, int]

DEFAULT_PALETTE: tuple[RGBA, ...] = (
    (198, 40, 40, 255),
    (21, 101, 192, 255),
    (106, 27, 154, 255),
    (46, 125, 50, 255),
    (239, 108, 0, 255),
)


def parse_color(color: ColorLike) -> RGBA:
    if isinstance(color, str):
        raw = color.strip().lstrip("#")
        if len(raw) == 3:
            raw = "".join(ch * 2 for ch in raw)
        if len(raw) not in (6, 8):
            raise ChartConfigError(f"invalid color: {color!r}")
        try:
            parts = [int(raw[i : i + 2], 16) for i in range(0, len(raw), 2)]
        except ValueError as exc:
            raise ChartConfigError(f"invalid color: {color!r}") from exc
        if len(parts) == 3:
            parts.append(255)
        return (parts[0], parts[1], parts[2], parts[3])
    if isinstance(color, (tuple, list)) and len(color) in (3, 4):
        channels = [int(c) for c in color]
        if any(c < 0 or c > 255 for c in channels):
            raise ChartConfigError(f"color channels must be in [0, 255]: {color!r}")
        if len(channels) == 3:
            channels.append(255)
        return (channels[0], channels[1], channels[2], channels[3])
    raise ChartConfigError(f"unsupported color: {color!r}")


@dataclass(frozen=True)
class SeriesConfig:
    name: str
    metric: str
    color: ColorLike = DEFAULT_PALETTE[0]
    width: int = 2
    point_radius: int = 3

    def __post_init__(self) -> None:
        if not self.name:
            raise ChartConfigError("series name must be non-empty")
        if not self.metric:
            raise ChartConfigError(f"series `{self.name}` needs a metric key")
        object.__setattr__(self, "color", parse_color(self.color))
        if self.width <= 0:
            raise ChartConfigError("series width must be > 0")
        if self.point_radius < 0:
            raise ChartConfigError("series point_radius must be >= 0")

    @property
    def style(self) -> SeriesStyle:
        return SeriesStyle(color=self.color, width=self.width, point_radius=self.point_radius)


@dataclass(frozen=True)
class ChartConfig:
    width: int = 800
    height: int = 260
    pad_left: int = 60
    pad_right: int = 20
    pad_top: int = 20
    pad_bottom: int = 50
    max_gap_seconds: float = DEFAULT_MAX_GAP_SECONDS
    tick_count: int = 5
    y_label_count: int = 5
    ranges_hours: Mapping[str, float] = field(default_factory=lambda: dict(DEFAULT_RANGES_HOURS), hash=False)
    default_range: str = DEFAULT_RANGE_KEY
    series: tuple[SeriesConfig, ...] = ()
    y_label_format: str | None = None
    show_legend: bool = True
    hover_max_distance_px: float = 10.0
    empty_message: str = "No data in range"

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ChartConfigError("width and height must be > 0")
        if min(self.pad_left, self.pad_right, self.pad_top, self.pad_bottom) < 0:
            raise ChartConfigError("padding must be >= 0")
        if self.max_gap_seconds < 0:
            raise ChartConfigError("max_gap_seconds must be >= 0")
        if self.tick_count < 2:
            raise ChartConfigError("tick_count must be >= 2")
        if self.y_label_count < 2:
            raise ChartConfigError("y_label_count must be >= 2")
        if self.hover_max_distance_px < 0:
            raise ChartConfigError("hover_max_distance_px must be >= 0")
        for key, hours in self.ranges_hours.items():
            if not isinstance(hours, (int, float)) or isinstance(hours, bool) or not math.isfinite(hours) or hours < 0:
                raise ChartConfigError(f"range `{key}` must be a finite, non-negative number of hours")
        # Presets are shared module state; the range table is read-only.
        object.__setattr__(self, "ranges_hours", MappingProxyType(dict(self.ranges_hours)))
        object.__setattr__(self, "series", tuple(self.series))
        names = [s.name for s in self.series]
        if len(set(names)) != len(names):
            raise ChartConfigError("series names must be unique")
        if self.y_label_format is not None:
            try:
                self.y_label_format.format(1.0)
            except (ValueError, IndexError, KeyError) as exc:
                raise ChartConfigError(f"invalid y_label_format: {self.y_label_format!r}") from exc

    @property
    def plot_width(self) -> int:
        return max(1, self.width - self.pad_left - self.pad_right)

    @property
    def plot_height(self) -> int:
        return max(1, self.height - self.pad_top - self.pad_bottom)

    def style_for(self, name: str, index: int = 0) -> SeriesStyle:
        for series in self.series:
            if series.name == name:
                return series.style
        return SeriesStyle(color=DEFAULT_PALETTE[index % len(DEFAULT_PALETTE)])

    def with_size(self, width: int | None = None, height: int | None = None) -> "ChartConfig":
        return replace(self, width=self.width if width is None else width, height=self.height if height is None else height)


PRESETS: dict[str, ChartConfig] = {
    "temps": ChartConfig(
        series=(
            SeriesConfig(name="Temp", metric="temp_c", color="#c62828"),
            SeriesConfig(name="RTC", metric="rtc_temp_c", color="#2e7d32"),
        ),
        y_label_format="{:.1f}°C",
    ),
    "humidity": ChartConfig(
        series=(SeriesConfig(name="Humidity", metric="rh", color="#1565c0"),),
        y_label_format="{:.1f} %",
    ),
    "co2": ChartConfig(
        series=(SeriesConfig(name="eCO₂", metric="eco2_ppm", color="#6a1b9a"),),
        y_label_format="{:.0f} ppm",
    ),
    "tvoc": ChartConfig(
        series=(SeriesConfig(name="TVOC", metric="tvoc_ppb", color="#ef6c00"),),
        y_label_format="{:.0f} ppb",
    ),
    "overview": ChartConfig(
        series=(
            SeriesConfig(name="Temp", metric="temp_c", color="#c62828"),
            SeriesConfig(name="Humidity", metric="rh", color="#1565c0"),
            SeriesConfig(name="eCO₂", metric="eco2_ppm", color="#6a1b9a"),
        ),
    ),
}


def preset(name: str) -> ChartConfig:
    try:
        return PRESETS[name]
    except KeyError as exc:
        raise ChartConfigError(f"unknown chart preset: {name} (expected one of {', '.join(sorted(PRESETS))})") from exc


def load_chart_config(path: str | Path) -> ChartConfig:
    """Read a chart definition from TOML.

    Layout::

        [chart]
        width = 800
        max_gap_seconds = 240
        y_label_format = "{:.1f}°C"

        [ranges]
        "12h" = 12

        [[series]]
        name = "Temp"
        metric = "temp_c"
        color = "#c62828"
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"chart config not found: {config_path}")
    with config_path.open("rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ChartConfigError(f"invalid TOML in {config_path}: {exc}") from exc
    return config_from_dict(raw)


def config_from_dict(raw: Mapping[str, Any]) -> ChartConfig:
    chart = raw.get("chart", {})
    if not isinstance(chart, Mapping):
        raise ChartConfigError("`chart` must be a table")
    known = {
        "width",
        "height",
        "pad_left",
        "pad_right",
        "pad_top",
        "pad_bottom",
        "max_gap_seconds",
        "tick_count",
        "y_label_count",
        "default_range",
        "y_label_format",
        "show_legend",
        "hover_max_distance_px",
        "empty_message",
    }
    unknown = sorted(set(chart) - known)
    if unknown:
        raise ChartConfigError(f"unknown chart keys: {', '.join(unknown)}")
    kwargs: dict[str, Any] = dict(chart)

    ranges = raw.get("ranges")
    if ranges is not None:
        if not isinstance(ranges, Mapping):
            raise ChartConfigError("`ranges` must be a table")
        kwargs["ranges_hours"] = {**DEFAULT_RANGES_HOURS, **ranges}

    series_raw = raw.get("series", [])
    if not isinstance(series_raw, list):
        raise ChartConfigError("`series` must be an array of tables")
    kwargs["series"] = tuple(_series_from_dict(item) for item in series_raw)
    try:
        return ChartConfig(**kwargs)
    except TypeError as exc:
        raise ChartConfigError(f"invalid chart config: {exc}") from exc


def _series_from_dict(raw: Any) -> SeriesConfig:
    if not isinstance(raw, Mapping):
        raise ChartConfigError("each series entry must be a table")
    try:
        name = str(raw["name"])
        metric = str(raw["metric"])
    except KeyError as exc:
        raise ChartConfigError(f"series missing required field: {exc.args[0]}") from exc
    return SeriesConfig(
        name=name,
        metric=metric,
        color=raw.get("color", DEFAULT_PALETTE[0]),
        width=int(raw.get("width", 2)),
        point_radius=int(raw.get("point_radius", 3)),
    )
