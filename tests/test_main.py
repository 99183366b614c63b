from __future__ import annotations

import contextlib
import io
import json
from pathlib import Path
import tempfile
import unittest

from main import main


TELEMETRY = {
    "readings": [
        {"recorded_at": 0, "values": {"temp_c": 20.0, "rtc_temp_c": 19.5}},
        {"recorded_at": 60, "values": {"temp_c": 20.5, "rtc_temp_c": 19.6}},
        {"recorded_at": 3600, "values": {"temp_c": 21.0}},
    ]
}


class MainCliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.data = self.tmp / "telemetry.json"
        self.data.write_text(json.dumps(TELEMETRY), encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, *argv: str) -> tuple[int, str]:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main(list(argv))
        return code, out.getvalue()

    def test_plan_prints_json(self) -> None:
        code, out = self._run("plan", str(self.data), "--range", "1h", "--preset", "temps")
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertFalse(payload["is_empty"])
        self.assertEqual([s["name"] for s in payload["series"]], ["Temp", "RTC"])
        self.assertEqual(payload["gap_markers"], [{"at": 60}])

    def test_render_writes_png(self) -> None:
        target = self.tmp / "out" / "temps.png"
        code, out = self._run("render", str(self.data), str(target), "--preset", "temps", "--theme", "dark", "--width", "400")
        self.assertEqual(code, 0)
        self.assertTrue(target.exists())
        self.assertIn("wrote", out)

    def test_hover_prints_nearest_sample(self) -> None:
        code, out = self._run("hover", str(self.data), "--range", "1h", "--preset", "temps", "--x", "779")
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out), {"series": "Temp", "t": 3600, "v": 21.0})

        _, out = self._run("hover", str(self.data), "--range", "1h", "--x", "400")
        self.assertIsNone(json.loads(out))

    def test_missing_input_is_a_usage_error(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main(["plan", str(self.tmp / "missing.json")])
        self.assertEqual(ctx.exception.code, 2)

    def test_config_file_overrides_layout(self) -> None:
        chart = self.tmp / "chart.toml"
        chart.write_text('[chart]\nheight = 300\n\n[[series]]\nname = "Temp"\nmetric = "temp_c"\n', encoding="utf-8")
        _, out = self._run("plan", str(self.data), "--config", str(chart))
        payload = json.loads(out)
        self.assertEqual(payload["height"], 300)
        self.assertEqual([s["name"] for s in payload["series"]], ["Temp"])


if __name__ == "__main__":
    unittest.main()
