from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when engine input has the wrong shape at the adapter boundary."""


class ChartConfigError(ValueError):
    """Raised for invalid chart configuration (sizes, thresholds, series styles)."""
