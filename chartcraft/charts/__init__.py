"""Chart domain model, defaults, render adapter and export naming."""

from __future__ import annotations

from chartcraft.charts.models import (
    ChartOptions,
    ChartOptionsPatch,
    ChartType,
    DataItem,
    is_multi_series,
)

__all__ = [
    "ChartOptions",
    "ChartOptionsPatch",
    "ChartType",
    "DataItem",
    "is_multi_series",
]
