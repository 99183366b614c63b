from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from airbuddy_plot.errors import ChartDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


def coerce_numeric(values: Any, *, label: str = "values") -> np.ndarray:
    """Return a float64 copy of ``values`` with unusable entries as NaN.

    Telemetry is noisy, so ``None``, blanks and non-numeric strings become
    missing readings instead of errors. Only structurally wrong input (not a
    1-D sequence) raises.
    """
    if values is None:
        return np.empty(0, dtype=np.float64)

    if pd is not None and isinstance(values, pd.Series):
        return _coerce_ndarray(values.to_numpy(), label=label)

    if isinstance(values, np.ndarray):
        if values.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        return _coerce_ndarray(values, label=label)

    if isinstance(values, Sequence) and not isinstance(values, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(list(values), dtype=object), label=label)

    raise ChartDataError(f"unsupported {label} input type: {type(values)!r}")


def coerce_timestamps(values: Any) -> np.ndarray:
    """Like ``coerce_numeric`` but floored to whole unix seconds."""
    arr = coerce_numeric(values, label="timestamps")
    finite = np.isfinite(arr)
    arr[finite] = np.floor(arr[finite])
    return arr


def align_to(values: np.ndarray, length: int) -> np.ndarray:
    """Pad with NaN or truncate so ``values`` is index-aligned to ``length`` timestamps."""
    if values.size == length:
        return values
    if values.size > length:
        return values[:length]
    out = np.full(length, np.nan, dtype=np.float64)
    out[: values.size] = values
    return out


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.ndim != 1:
        raise ChartDataError(f"{label} must be 1-D")
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=True)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        out[i] = _to_float(raw)
    return out


def _to_float(raw: Any) -> float:
    if raw is None:
        return np.nan
    if isinstance(raw, Decimal):
        return float(raw)
    try:
        return float(raw)
    except (TypeError, ValueError):
        return np.nan
