"""
Chart domain models.

DataItem is one chart data point; ChartOptions holds the chart-wide settings.
Both are immutable: the state store replaces them instead of editing in place.
"""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from chartcraft.config import MAX_ABS_VALUE

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class ChartType(str, Enum):
    """Chart representations the renderer knows how to draw."""

    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    AREA = "area"
    RADAR = "radar"
    RADIAL_BAR = "radialBar"
    TREEMAP = "treemap"


MULTI_SERIES_TYPES: frozenset[ChartType] = frozenset(
    {ChartType.PIE, ChartType.RADIAL_BAR, ChartType.TREEMAP}
)


def is_multi_series(kind: ChartType) -> bool:
    """True when each item gets its own palette color and ``color`` is ignored."""
    return kind in MULTI_SERIES_TYPES


def check_numeric_value(value: Any, max_abs_value: float = MAX_ABS_VALUE) -> int | float:
    """Accept ints and finite floats within ``max_abs_value`` (bools are not numbers here)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("value must be a number")
    # ints are compared exactly; math.isfinite() would overflow on huge ones
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("value must be a finite number")
    if abs(value) > max_abs_value:
        raise ValueError(f"value exceeds magnitude limit {max_abs_value:g}")
    return value


def _check_hex_color(value: str) -> str:
    if not _HEX_COLOR_RE.match(value):
        raise ValueError(f"color must be a hex color like #3b82f6, got {value!r}")
    return value


class DataItem(BaseModel):
    """
    One chart data point.

    Extra named fields are kept as-is (renderers add e.g. ``fill``), so the
    model is open for extension without widening the declared schema.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: StrictStr = Field(..., min_length=1, description="Unique within its sequence")
    name: StrictStr = Field(..., description="Category label (month, product, ...)")
    value: int | float = Field(..., description="Finite, at most MAX_ABS_VALUE in magnitude")

    @field_validator("value", mode="before")
    @classmethod
    def value_is_finite_number(cls, v: Any) -> int | float:
        return check_numeric_value(v)

    def name_value(self) -> dict[str, Any]:
        """Reduced projection without extension fields."""
        return {"name": self.name, "value": self.value}


class ChartOptions(BaseModel):
    """Chart-wide presentation settings."""

    model_config = ConfigDict(frozen=True)

    title: StrictStr = Field(..., description="May be empty; export falls back to a default name")
    type: ChartType
    color: StrictStr = Field(..., description="Series color for single-series kinds")

    @field_validator("color")
    @classmethod
    def color_is_hex(cls, v: str) -> str:
        return _check_hex_color(v)


class ChartOptionsPatch(BaseModel):
    """Partial ChartOptions; only fields that are set override current values."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: StrictStr | None = None
    type: ChartType | None = None
    color: StrictStr | None = None

    @field_validator("color")
    @classmethod
    def color_is_hex(cls, v: str | None) -> str | None:
        return None if v is None else _check_hex_color(v)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)

    def apply_to(self, options: ChartOptions) -> ChartOptions:
        """Shallow field-by-field merge over ``options``."""
        return ChartOptions.model_validate({**options.model_dump(), **self.changes()})
