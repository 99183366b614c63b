from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from airbuddy_plot.config import (
    PRESETS,
    ChartConfig,
    SeriesConfig,
    config_from_dict,
    load_chart_config,
    parse_color,
    preset,
)
from airbuddy_plot.errors import ChartConfigError
from airbuddy_plot.window import DEFAULT_RANGES_HOURS


class ParseColorTests(unittest.TestCase):
    def test_hex_and_tuple_forms(self) -> None:
        self.assertEqual(parse_color("#c62828"), (198, 40, 40, 255))
        self.assertEqual(parse_color("#fff"), (255, 255, 255, 255))
        self.assertEqual(parse_color("#00000026"), (0, 0, 0, 38))
        self.assertEqual(parse_color((1, 2, 3)), (1, 2, 3, 255))
        self.assertEqual(parse_color([1, 2, 3, 4]), (1, 2, 3, 4))  # type: ignore[arg-type]

    def test_invalid_colors_raise(self) -> None:
        for bad in ("#12", "#gggggg", (0, 0, 300), 12):
            with self.subTest(bad=bad):
                with self.assertRaises(ChartConfigError):
                    parse_color(bad)  # type: ignore[arg-type]


class ChartConfigTests(unittest.TestCase):
    def test_defaults_match_dashboard_layout(self) -> None:
        config = ChartConfig()
        self.assertEqual((config.pad_left, config.pad_right, config.pad_top, config.pad_bottom), (60, 20, 20, 50))
        self.assertEqual(config.max_gap_seconds, 240)
        self.assertEqual(config.plot_width, 720)
        self.assertEqual(config.plot_height, 190)
        self.assertEqual(dict(config.ranges_hours), dict(DEFAULT_RANGES_HOURS))

    def test_tiny_canvas_keeps_one_pixel_plot(self) -> None:
        config = ChartConfig(width=50, height=40)
        self.assertEqual((config.plot_width, config.plot_height), (1, 1))

    def test_validation(self) -> None:
        cases = [
            {"width": 0},
            {"pad_left": -1},
            {"max_gap_seconds": -5},
            {"tick_count": 1},
            {"y_label_count": 1},
            {"hover_max_distance_px": -1},
            {"ranges_hours": {"1h": -1}},
            {"ranges_hours": {"1h": float("nan")}},
            {"ranges_hours": {"1h": float("inf")}},
            {"y_label_format": "{:d}"},
            {"series": (SeriesConfig(name="A", metric="a"), SeriesConfig(name="A", metric="b"))},
        ]
        for kwargs in cases:
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ChartConfigError):
                    ChartConfig(**kwargs)

    def test_series_config_validation(self) -> None:
        with self.assertRaises(ChartConfigError):
            SeriesConfig(name="", metric="a")
        with self.assertRaises(ChartConfigError):
            SeriesConfig(name="A", metric="a", width=0)
        self.assertEqual(SeriesConfig(name="A", metric="a", color="#1565c0").style.color, (21, 101, 192, 255))

    def test_with_size_returns_copy(self) -> None:
        config = ChartConfig()
        resized = config.with_size(width=400)
        self.assertEqual((resized.width, resized.height), (400, config.height))
        self.assertEqual(config.width, 800)


class PresetTests(unittest.TestCase):
    def test_presets_cover_dashboard_charts(self) -> None:
        self.assertEqual(set(PRESETS), {"temps", "humidity", "co2", "tvoc", "overview"})
        temps = preset("temps")
        self.assertEqual([(s.name, s.metric) for s in temps.series], [("Temp", "temp_c"), ("RTC", "rtc_temp_c")])
        self.assertEqual(preset("co2").y_label_format, "{:.0f} ppm")

    def test_presets_are_read_only(self) -> None:
        with self.assertRaises(TypeError):
            preset("temps").ranges_hours["1h"] = 99  # type: ignore[index]
        self.assertEqual(preset("temps").ranges_hours["1h"], 1)
        self.assertEqual(hash(preset("temps")), hash(PRESETS["temps"]))

    def test_unknown_preset(self) -> None:
        with self.assertRaises(ChartConfigError):
            preset("pm25")


class LoadChartConfigTests(unittest.TestCase):
    def _write(self, tmp: str, body: str) -> Path:
        path = Path(tmp) / "chart.toml"
        path.write_text(body, encoding="utf-8")
        return path

    def test_loads_chart_ranges_and_series(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(
                tmp,
                """
[chart]
width = 640
max_gap_seconds = 600
y_label_format = "{:.1f} %"
show_legend = false

[ranges]
"12h" = 12

[[series]]
name = "Humidity"
metric = "rh"
color = "#1565c0"
width = 3
""",
            )
            config = load_chart_config(path)
        self.assertEqual(config.width, 640)
        self.assertEqual(config.max_gap_seconds, 600)
        self.assertFalse(config.show_legend)
        self.assertEqual(config.ranges_hours["12h"], 12)
        self.assertEqual(config.ranges_hours["24h"], 24)
        self.assertEqual(config.series, (SeriesConfig(name="Humidity", metric="rh", color="#1565c0", width=3),))

    def test_non_finite_range_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, "[ranges]\n\"1h\" = nan\n")
            with self.assertRaises(ChartConfigError):
                load_chart_config(path)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_chart_config("/nonexistent/chart.toml")

    def test_invalid_toml(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, "[chart\nwidth=")
            with self.assertRaises(ChartConfigError):
                load_chart_config(path)

    def test_rejects_unknown_keys_and_bad_series(self) -> None:
        with self.assertRaises(ChartConfigError):
            config_from_dict({"chart": {"colour": "red"}})
        with self.assertRaises(ChartConfigError):
            config_from_dict({"series": [{"name": "Temp"}]})
        with self.assertRaises(ChartConfigError):
            config_from_dict({"chart": {"width": "wide"}})


if __name__ == "__main__":
    unittest.main()
