"""Built-in defaults: seed dataset, default options, palette and type labels."""

from __future__ import annotations

from chartcraft.charts.models import ChartOptions, ChartType, DataItem

DEFAULT_CHART_COLOR = "#3b82f6"
DEFAULT_CHART_TITLE = "Informe de Ventas T1-T2"

CHART_TYPE_LABELS: dict[ChartType, str] = {
    ChartType.BAR: "Gráfico de Barras",
    ChartType.LINE: "Gráfico de Líneas",
    ChartType.PIE: "Gráfico Circular",
    ChartType.AREA: "Gráfico de Área",
    ChartType.RADAR: "Gráfico de Radar",
    ChartType.RADIAL_BAR: "Gráfico Radial",
    ChartType.TREEMAP: "Mapa de Árbol",
}

# Per-item colors for multi-series kinds, indexed by position (wraps around)
PALETTE: tuple[str, ...] = (
    "#3b82f6",
    "#ef4444",
    "#f97316",
    "#eab308",
    "#22c55e",
    "#14b8a6",
    "#6366f1",
    "#ec4899",
    "#8b5cf6",
    "#06b6d4",
    "#f59e0b",
    "#10b981",
)

_SEED_POINTS = (
    ("1", "Ene", 65),
    ("2", "Feb", 59),
    ("3", "Mar", 80),
    ("4", "Abr", 81),
    ("5", "May", 56),
    ("6", "Jun", 55),
)

EMPTY_CHART_MESSAGE = "No hay datos para mostrar. Genere o añada elementos de datos."


def seed_data_items() -> list[DataItem]:
    """Fresh copy of the seed dataset shown on first start."""
    return [DataItem(id=item_id, name=name, value=value) for item_id, name, value in _SEED_POINTS]


def default_chart_options() -> ChartOptions:
    return ChartOptions(title=DEFAULT_CHART_TITLE, type=ChartType.BAR, color=DEFAULT_CHART_COLOR)


def palette_color(index: int) -> str:
    return PALETTE[index % len(PALETTE)]
