from __future__ import annotations

from collections.abc import Iterable, Sequence

from airbuddy_plot.series import GapMarker, Sample, Segment


DEFAULT_MAX_GAP_SECONDS = 240


def build_segments(points: Sequence[Sample], max_gap_seconds: float = DEFAULT_MAX_GAP_SECONDS) -> tuple[Segment, ...]:
    """Split points into runs whose consecutive timestamps are at most ``max_gap_seconds`` apart."""
    if not points:
        return ()
    ordered = sorted(points, key=lambda p: p.t)
    runs: list[tuple[int, int]] = []
    start = 0
    for i in range(1, len(ordered)):
        if ordered[i].t - ordered[i - 1].t > max_gap_seconds:
            runs.append((start, i))
            start = i
    runs.append((start, len(ordered)))
    return tuple(Segment(points=tuple(ordered[a:b])) for a, b in runs)


def build_gap_markers(reading_timestamps: Iterable[int], max_gap_seconds: float = DEFAULT_MAX_GAP_SECONDS) -> tuple[GapMarker, ...]:
    """Markers at the last reading before each outage longer than ``max_gap_seconds``."""
    times = sorted(int(t) for t in reading_timestamps)
    markers: list[GapMarker] = []
    for prev, cur in zip(times, times[1:]):
        if cur - prev > max_gap_seconds:
            markers.append(GapMarker(at=prev))
    return tuple(markers)
