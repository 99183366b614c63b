from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from decimal import Decimal, InvalidOperation
import math


DEFAULT_TICK_COUNT = 5
TIME_LABEL_FORMAT = "%d %b %H:%M"


@dataclass(frozen=True)
class Bounds:
    min: float
    max: float
    step: float

    @property
    def span(self) -> float:
        return self.max - self.min


DEFAULT_BOUNDS = Bounds(min=0.0, max=1.0, step=1.0)


def nice_step(raw_step: float) -> float:
    if not math.isfinite(raw_step) or raw_step <= 0:
        return 1.0
    return _nice_number(raw_step)


def nice_bounds(min_v: float, max_v: float, tick_count: int = DEFAULT_TICK_COUNT) -> Bounds:
    """Round a value range outward to 1/2/5 x 10^k steps.

    Never raises: non-finite input yields ``DEFAULT_BOUNDS`` and a zero-width
    range is padded symmetrically before rounding.
    """
    if not _is_finite(min_v) or not _is_finite(max_v):
        return DEFAULT_BOUNDS
    lo = float(min(min_v, max_v))
    hi = float(max(min_v, max_v))

    if lo == hi:
        pad = 1.0 if lo == 0 else abs(lo) * 0.1
        lo -= pad
        hi += pad

    raw_step = (hi - lo) / max(1, int(tick_count) - 1)
    step = nice_step(raw_step)

    decimals = _decimals_from_step(step)
    raw_min = math.floor(lo / step) * step
    raw_max = math.ceil(hi / step) * step
    bmin = _snap(raw_min, decimals)
    bmax = _snap(raw_max, decimals)
    if bmin == bmax:
        bmax = _snap(bmax + step, decimals)

    # Rounding away float drift must not undo the outward rounding.
    if bmin > lo:
        bmin = _snap(bmin - step, decimals)
    if bmax < hi:
        bmax = _snap(bmax + step, decimals)
    if bmin > lo or bmax < hi or bmin >= bmax:
        bmin = raw_min if raw_min <= lo else raw_min - step
        bmax = raw_max if raw_max >= hi else raw_max + step
        if bmin >= bmax:
            bmax = bmin + step
    return Bounds(min=bmin, max=bmax, step=step)


def tick_values(bounds: Bounds, count: int = DEFAULT_TICK_COUNT) -> tuple[float, ...]:
    """Evenly spaced values from ``bounds.max`` down to ``bounds.min``."""
    if count <= 0:
        raise ValueError("count must be > 0")
    if count == 1:
        return (bounds.max,)
    decimals = _decimals_from_step(bounds.span / (count - 1)) if bounds.span > 0 else 6
    out = []
    for i in range(count):
        out.append(_snap(bounds.max - (i / (count - 1)) * bounds.span, decimals))
    return tuple(out)


def format_tick(value: float, *, step: float | None = None) -> str:
    if not math.isfinite(value):
        return str(value)
    if step is not None and math.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e6 or (step is not None and abs(step) < 1e-4) or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Only trim trailing zeros for fractional values (preserve integer zeros like 30, 40).
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_ticks_for_axis(ticks: tuple[float, ...] | list[float]) -> list[str]:
    if not ticks:
        return []
    if len(ticks) == 1:
        return [format_tick(float(ticks[0]))]
    step = float(abs(ticks[1] - ticks[0]))
    return [format_tick(float(v), step=step) for v in ticks]


def format_time(t: int | float, tz: dt.tzinfo | None = None) -> str:
    stamp = dt.datetime.fromtimestamp(float(t), tz=tz or dt.timezone.utc)
    return stamp.strftime(TIME_LABEL_FORMAT)


def _nice_number(value: float) -> float:
    exp = math.floor(math.log10(value))
    frac = value / (10**exp)
    if frac <= 1.0:
        nice_frac = 1.0
    elif frac <= 2.0:
        nice_frac = 2.0
    elif frac <= 5.0:
        nice_frac = 5.0
    else:
        nice_frac = 10.0
    return float(nice_frac * (10**exp))


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not math.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    # Keep a few significant digits below the step even when it is tiny.
    return min(max(12, 3 - math.floor(math.log10(step))), decimals)


def _snap(value: float, decimals: int) -> float:
    out = round(value, decimals)
    # Normalize -0.0 so equal plans stay equal after formatting.
    return 0.0 if out == 0 else out


def _is_finite(value: float) -> bool:
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False
