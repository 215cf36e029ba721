"""
Render adapter: turns the application state into what a chart engine consumes.

The engine itself is a black box taking a record list, the category/value
field names and a chart kind. Multi-series kinds get per-item palette colors;
radial bars and treemaps carry the color in a ``fill`` field on each record.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from chartcraft.charts.constants import EMPTY_CHART_MESSAGE, palette_color
from chartcraft.charts.models import ChartOptions, ChartType, DataItem, is_multi_series

CATEGORY_KEY = "name"
VALUE_KEY = "value"


@dataclass(frozen=True)
class EmptyChart:
    """Explicit empty state shown instead of a chart when there is no data."""

    message: str = EMPTY_CHART_MESSAGE


@dataclass(frozen=True)
class ChartView:
    kind: ChartType
    title: str
    records: list[dict[str, Any]]
    category_key: str = CATEGORY_KEY
    value_key: str = VALUE_KEY
    series_color: str | None = None
    item_colors: list[str] = field(default_factory=list)


def _records(items: Sequence[DataItem]) -> list[dict[str, Any]]:
    return [item.model_dump() for item in items]


def build_chart_view(items: Sequence[DataItem], options: ChartOptions) -> ChartView | EmptyChart:
    """Build the renderer input for ``options.type``; never raises on empty data."""
    if not items:
        return EmptyChart()

    records = _records(items)

    if not is_multi_series(options.type):
        return ChartView(
            kind=options.type,
            title=options.title,
            records=records,
            series_color=options.color,
        )

    colors = [palette_color(index) for index in range(len(records))]

    if options.type == ChartType.RADIAL_BAR:
        records = [{**record, "fill": color} for record, color in zip(records, colors)]
    elif options.type == ChartType.TREEMAP:
        # Treemap nodes are leaves; the engine expects an explicit children list
        records = [
            {**record, "fill": color, "children": []} for record, color in zip(records, colors)
        ]

    return ChartView(
        kind=options.type,
        title=options.title,
        records=records,
        item_colors=colors,
    )
