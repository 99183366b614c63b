from __future__ import annotations

from dataclasses import dataclass


RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class Sample:
    t: int
    v: float


@dataclass(frozen=True)
class Series:
    name: str
    points: tuple[Sample, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.points


@dataclass(frozen=True)
class Segment:
    """Run of one series' samples that can be joined by a single unbroken line."""

    points: tuple[Sample, ...]

    @property
    def start(self) -> int:
        return self.points[0].t

    @property
    def end(self) -> int:
        return self.points[-1].t

    @property
    def is_isolated(self) -> bool:
        return len(self.points) == 1


@dataclass(frozen=True)
class GapMarker:
    at: int


@dataclass(frozen=True)
class SeriesStyle:
    color: RGBA = (62, 149, 255, 255)
    width: int = 2
    point_radius: int = 3
