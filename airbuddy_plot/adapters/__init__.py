from .normalize import align_to, coerce_numeric, coerce_timestamps
from .telemetry import (
    TelemetryArrays,
    arrays_from_dict,
    arrays_from_frame,
    arrays_from_readings,
    load_arrays_json,
)

__all__ = [
    "TelemetryArrays",
    "align_to",
    "arrays_from_dict",
    "arrays_from_frame",
    "arrays_from_readings",
    "coerce_numeric",
    "coerce_timestamps",
    "load_arrays_json",
]
