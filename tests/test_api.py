from __future__ import annotations

import unittest

from airbuddy_plot import ChartConfig, SeriesConfig, hover_chart, plan_chart
from airbuddy_plot.hover import DEFAULT_MAX_PIXEL_DISTANCE
from airbuddy_plot.scales import nice_bounds
from airbuddy_plot.series import Sample, Segment
from airbuddy_plot.window import Window


class PlanChartTests(unittest.TestCase):
    def test_one_hour_window_keeps_only_latest_sample(self) -> None:
        out = plan_chart([0, 120, 121, 50000], {"temp_c": [20.0, None, 21.5, 22.0]}, "1h")
        self.assertEqual(out.window, Window(cutoff=46400, latest=50000))
        self.assertFalse(out.is_empty)
        self.assertEqual(len(out.series), 1)
        self.assertEqual(out.series[0].segments, (Segment(points=(Sample(50000, 22.0),)),))
        self.assertEqual(out.gap_markers, ())
        self.assertEqual(out.bounds, nice_bounds(22.0, 22.0, 5))

    def test_no_timestamps_gives_empty_plan_without_window(self) -> None:
        out = plan_chart([], {"temp_c": []})
        self.assertTrue(out.is_empty)
        self.assertIsNone(out.window)
        self.assertEqual(out.message, "No data in range")

    def test_only_missing_values_gives_empty_plan_with_window(self) -> None:
        out = plan_chart([0, 60], {"temp_c": [None, None]}, "1h")
        self.assertTrue(out.is_empty)
        self.assertEqual(out.window, Window(cutoff=-3540, latest=60))

    def test_configured_series_pick_metrics_and_names(self) -> None:
        config = ChartConfig(
            series=(
                SeriesConfig(name="Temp", metric="temp_c", color="#c62828"),
                SeriesConfig(name="RTC", metric="rtc_temp_c", color="#2e7d32"),
            )
        )
        metrics = {"temp_c": [20.0, 21.0], "rtc_temp_c": [19.0, None], "rh": [40.0, 41.0]}
        out = plan_chart([0, 60], metrics, "1h", config)
        self.assertEqual([s.name for s in out.series], ["Temp", "RTC"])
        self.assertEqual(out.series[1].points, (Sample(0, 19.0),))
        self.assertEqual(out.series[1].style.color, (46, 125, 50, 255))

    def test_missing_metric_logs_warning(self) -> None:
        config = ChartConfig(series=(SeriesConfig(name="CO2", metric="eco2_ppm"),))
        with self.assertLogs("airbuddy_plot.api", level="WARNING") as logs:
            out = plan_chart([0], {"temp_c": [20.0]}, "1h", config)
        self.assertTrue(out.is_empty)
        self.assertIn("eco2_ppm", logs.output[0])

    def test_unknown_range_falls_back_to_day(self) -> None:
        with self.assertLogs("airbuddy_plot.window", level="WARNING"):
            out = plan_chart([0, 100000], {"v": [1.0, 2.0]}, "2w")
        self.assertEqual(out.window, Window(cutoff=100000 - 86400, latest=100000))
        self.assertEqual(out.series[0].points, (Sample(100000, 2.0),))


class HoverChartTests(unittest.TestCase):
    def test_hover_resolves_against_plan_mapping(self) -> None:
        out = plan_chart([0, 1800, 3600], {"v": [1.0, 2.0, 3.0]}, "1h")
        hit = hover_chart(out, 779.0)
        assert hit is not None
        self.assertEqual((hit.series_name, hit.time, hit.value), ("v", 3600, 3.0))
        self.assertIsNone(hover_chart(out, 600.0))

    def test_default_threshold_matches_locator(self) -> None:
        out = plan_chart([0, 3600], {"v": [1.0, 2.0]}, "1h")
        assert out.mapping is not None
        edge = out.mapping.time_to_x(3600) - DEFAULT_MAX_PIXEL_DISTANCE
        self.assertIsNotNone(hover_chart(out, edge))
        self.assertIsNone(hover_chart(out, edge - 0.5))
        self.assertIsNotNone(hover_chart(out, edge - 0.5, max_pixel_distance=DEFAULT_MAX_PIXEL_DISTANCE + 1))

    def test_hover_on_empty_plan(self) -> None:
        self.assertIsNone(hover_chart(plan_chart([], {}), 100.0))


if __name__ == "__main__":
    unittest.main()
