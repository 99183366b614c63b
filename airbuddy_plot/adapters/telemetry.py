from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
import json
import logging
import math
from pathlib import Path
from typing import Any

from airbuddy_plot.adapters.normalize import pd
from airbuddy_plot.errors import ChartDataError


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class TelemetryArrays:
    """Parallel arrays handed over by the data-fetch layer.

    Every metric array is index-aligned to ``timestamps``; ``None`` marks a
    missing reading.
    """

    timestamps: tuple[Any, ...]
    metrics: dict[str, tuple[Any, ...]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.timestamps)

    def metric(self, key: str) -> tuple[Any, ...]:
        return self.metrics.get(key, ())


def arrays_from_readings(
    readings: Iterable[Mapping[str, Any]],
    metrics: Iterable[str] | None = None,
) -> TelemetryArrays:
    """Pivot stored telemetry rows into parallel arrays.

    Rows are ``{"recorded_at": <unix seconds>, "values": {...}}``. Rows are
    ordered by ``recorded_at``; a repeated ``recorded_at`` keeps the last row
    seen, matching the idempotent ``(device, recorded_at)`` ingestion rule.
    """
    by_time: dict[int, Mapping[str, Any]] = {}
    skipped = 0
    for row in readings:
        recorded_at = _recorded_at(row.get("recorded_at"))
        values = row.get("values")
        if recorded_at is None or not isinstance(values, Mapping):
            skipped += 1
            continue
        by_time[recorded_at] = values
    if skipped:
        LOGGER.debug("skipped %d telemetry rows without usable recorded_at/values", skipped)

    if metrics is None:
        keys: list[str] = []
        for values in by_time.values():
            for key in values:
                if key not in keys:
                    keys.append(key)
    else:
        keys = list(metrics)

    times = sorted(by_time)
    return TelemetryArrays(
        timestamps=tuple(times),
        metrics={key: tuple(by_time[t].get(key) for t in times) for key in keys},
    )


def arrays_from_frame(data: Any, *, time_column: str = "recorded_at") -> TelemetryArrays:
    if pd is None:
        raise ChartDataError("pandas is required for DataFrame input")
    if not isinstance(data, pd.DataFrame):
        raise ChartDataError("data must be a pandas DataFrame")
    if time_column not in data.columns:
        raise ChartDataError(f"column not found: {time_column}")
    return TelemetryArrays(
        timestamps=tuple(data[time_column].tolist()),
        metrics={str(c): tuple(data[c].tolist()) for c in data.columns if c != time_column},
    )


def arrays_from_dict(raw: Mapping[str, Any]) -> TelemetryArrays:
    if "readings" in raw:
        readings = raw["readings"]
        if not isinstance(readings, list):
            raise ChartDataError("`readings` must be a list")
        return arrays_from_readings(r for r in readings if isinstance(r, Mapping))
    timestamps = raw.get("timestamps")
    if not isinstance(timestamps, list):
        raise ChartDataError("`timestamps` must be a list")
    metrics: dict[str, tuple[Any, ...]] = {}
    for key, values in raw.items():
        if key == "timestamps":
            continue
        if not isinstance(values, list):
            raise ChartDataError(f"metric `{key}` must be a list")
        metrics[str(key)] = tuple(values)
    return TelemetryArrays(timestamps=tuple(timestamps), metrics=metrics)


def load_arrays_json(path: str | Path) -> TelemetryArrays:
    data_path = Path(path)
    if not data_path.exists():
        raise FileNotFoundError(f"telemetry file not found: {data_path}")
    with data_path.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, Mapping):
        raise ChartDataError("telemetry JSON must be an object")
    return arrays_from_dict(raw)


def _recorded_at(raw: Any) -> int | None:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return None
    if not math.isfinite(raw):
        return None
    return int(math.floor(raw))
