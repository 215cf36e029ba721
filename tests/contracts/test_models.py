from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from chartcraft.charts.models import (
    ChartOptions,
    ChartOptionsPatch,
    ChartType,
    DataItem,
    is_multi_series,
)


def test_data_item_keeps_extension_fields():
    item = DataItem.model_validate({"id": "1", "name": "Ene", "value": 65, "fill": "#fff"})

    assert item.fill == "#fff"
    assert item.model_dump() == {"id": "1", "name": "Ene", "value": 65, "fill": "#fff"}
    assert item.name_value() == {"name": "Ene", "value": 65}


def test_data_item_is_immutable():
    item = DataItem(id="1", name="Ene", value=65)

    with pytest.raises(ValidationError):
        item.value = 10


@pytest.mark.parametrize(
    "data",
    [
        {"id": "", "name": "Ene", "value": 1},
        {"id": "1", "name": 3, "value": 1},
        {"id": "1", "name": "Ene", "value": True},
        {"id": "1", "name": "Ene", "value": "12"},
        {"id": "1", "name": "Ene", "value": math.nan},
        {"id": "1", "name": "Ene", "value": math.inf},
        {"id": "1", "name": "Ene"},
    ],
)
def test_data_item_rejects_invalid_fields(data):
    with pytest.raises(ValidationError):
        DataItem.model_validate(data)


def test_chart_type_parses_wire_names():
    assert ChartType("radialBar") is ChartType.RADIAL_BAR
    assert ChartOptions.model_validate(
        {"title": "", "type": "treemap", "color": "#abc"}
    ).type is ChartType.TREEMAP

    with pytest.raises(ValueError):
        ChartType("scatter")


@pytest.mark.parametrize("color", ["blue", "#12345", "3b82f6", "#ggg"])
def test_chart_options_reject_non_hex_colors(color):
    with pytest.raises(ValidationError):
        ChartOptions(title="T", type=ChartType.BAR, color=color)


def test_patch_overrides_only_given_fields():
    options = ChartOptions(title="Ventas", type=ChartType.BAR, color="#3b82f6")

    updated = ChartOptionsPatch(type="line").apply_to(options)

    assert updated == ChartOptions(title="Ventas", type=ChartType.LINE, color="#3b82f6")
    assert options.type is ChartType.BAR


def test_patch_can_set_empty_title():
    options = ChartOptions(title="Ventas", type=ChartType.BAR, color="#3b82f6")

    assert ChartOptionsPatch(title="").apply_to(options).title == ""


def test_patch_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        ChartOptionsPatch.model_validate({"legend": True})


@pytest.mark.parametrize(
    "kind, expected",
    [
        (ChartType.BAR, False),
        (ChartType.LINE, False),
        (ChartType.AREA, False),
        (ChartType.RADAR, False),
        (ChartType.PIE, True),
        (ChartType.RADIAL_BAR, True),
        (ChartType.TREEMAP, True),
    ],
)
def test_multi_series_kinds(kind, expected):
    assert is_multi_series(kind) is expected


@pytest.mark.parametrize("value", [10**400, -(10**400), 1e16])
def test_data_item_rejects_out_of_range_values(value):
    with pytest.raises(ValidationError):
        DataItem(id="1", name="Ene", value=value)
