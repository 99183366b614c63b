from airbuddy_plot.api import hover_chart, plan_chart
from airbuddy_plot.config import ChartConfig, SeriesConfig, load_chart_config, preset
from airbuddy_plot.errors import ChartConfigError, ChartDataError
from airbuddy_plot.filtering import FilteredSeries, filter_series
from airbuddy_plot.hover import HoverHit, nearest
from airbuddy_plot.planner import AxisMapping, DrawPlan, plan
from airbuddy_plot.scales import Bounds, nice_bounds
from airbuddy_plot.segments import build_gap_markers, build_segments
from airbuddy_plot.series import GapMarker, Sample, Segment, Series
from airbuddy_plot.window import DEFAULT_RANGES_HOURS, Window, select_window

__all__ = [
    "AxisMapping",
    "Bounds",
    "ChartConfig",
    "ChartConfigError",
    "ChartDataError",
    "DEFAULT_RANGES_HOURS",
    "DrawPlan",
    "FilteredSeries",
    "GapMarker",
    "HoverHit",
    "Sample",
    "Segment",
    "Series",
    "SeriesConfig",
    "Window",
    "build_gap_markers",
    "build_segments",
    "filter_series",
    "hover_chart",
    "load_chart_config",
    "nearest",
    "nice_bounds",
    "plan",
    "plan_chart",
    "preset",
    "select_window",
]
