"""Tests for ChartWorkspace: in-flight flags, error surfacing, stale responses."""

from __future__ import annotations

import asyncio
import json

import pytest

from chartcraft.charts.models import ChartType
from chartcraft.charts.rendering import ChartView, EmptyChart
from chartcraft.errors import DATA_GENERATION_FAILED, INSIGHT_GENERATION_FAILED, TransportError
from chartcraft.infrastructure.storage import SQLiteKeyValueStorage
from chartcraft.llm import client as llm_client
from chartcraft.observability.telemetry import get_counter
from chartcraft.services.insights import InsightService
from chartcraft.services.synthesis import DataSynthesisService
from chartcraft.state.store import ChartStateStore
from chartcraft.workspace import ChartWorkspace, create_workspace


class GatedLLM:
    """Fake LLM whose calls stay pending until the test resolves them."""

    def __init__(self) -> None:
        self.pending: list[asyncio.Future] = []
        self.prompts: list[str] = []

    async def __call__(self, prompt: str, **kwargs) -> str:
        future = asyncio.get_running_loop().create_future()
        self.pending.append(future)
        self.prompts.append(prompt)
        return await future


async def _settle() -> None:
    for _ in range(5):
        await asyncio.sleep(0)


def _points(*names: str) -> str:
    return json.dumps([{"name": name, "value": i + 1} for i, name in enumerate(names)])


def _workspace(store, data_llm, insight_llm=None) -> ChartWorkspace:
    return ChartWorkspace(
        store,
        DataSynthesisService(llm=data_llm),
        InsightService(llm=insight_llm or data_llm),
    )


@pytest.mark.asyncio
async def test_generate_data_replaces_store_contents(store, make_llm):
    workspace = _workspace(store, make_llm(_points("A", "B", "C")))

    assert await workspace.generate_data("three letters") is True

    assert [item.name for item in store.data_items] == ["A", "B", "C"]
    assert workspace.error is None
    assert not workspace.is_generating_data


@pytest.mark.asyncio
@pytest.mark.parametrize("prompt", ["", "  "])
async def test_blank_prompt_is_a_no_op(store, make_llm, prompt):
    llm = make_llm()
    workspace = _workspace(store, llm)
    before = store.data_items

    assert await workspace.generate_data(prompt) is False

    assert llm.calls == []
    assert store.data_items == before


@pytest.mark.asyncio
async def test_failure_sets_error_and_keeps_last_good_state(store, make_llm):
    workspace = _workspace(store, make_llm('[{"name": "A", "value": "oops"}]'))
    before = store.data_items

    assert await workspace.generate_data("bad data") is False

    assert workspace.error == DATA_GENERATION_FAILED
    assert store.data_items == before
    assert not workspace.is_generating_data


@pytest.mark.asyncio
async def test_in_flight_flag_while_generating(store):
    llm = GatedLLM()
    workspace = _workspace(store, llm)

    task = asyncio.create_task(workspace.generate_data("anything"))
    await _settle()
    assert workspace.is_generating_data

    llm.pending[0].set_result(_points("A"))
    await task
    assert not workspace.is_generating_data


@pytest.mark.asyncio
async def test_stale_data_response_is_dropped(store):
    llm = GatedLLM()
    workspace = _workspace(store, llm)

    first = asyncio.create_task(workspace.generate_data("first"))
    await _settle()
    second = asyncio.create_task(workspace.generate_data("second"))
    await _settle()
    assert len(llm.pending) == 2

    llm.pending[1].set_result(_points("new"))
    assert await second is True
    assert not workspace.is_generating_data

    llm.pending[0].set_result(_points("old"))
    assert await first is False

    assert [item.name for item in store.data_items] == ["new"]
    assert get_counter("workspace.data.stale_dropped") == 1


@pytest.mark.asyncio
async def test_stale_failure_does_not_set_error(store):
    llm = GatedLLM()
    workspace = _workspace(store, llm)

    first = asyncio.create_task(workspace.generate_data("first"))
    await _settle()
    second = asyncio.create_task(workspace.generate_data("second"))
    await _settle()

    llm.pending[1].set_result(_points("ok"))
    await second
    llm.pending[0].set_exception(TransportError("late failure"))
    await first

    assert workspace.error is None


@pytest.mark.asyncio
async def test_data_and_insight_flows_overlap(store):
    data_llm = GatedLLM()
    insight_llm = GatedLLM()
    workspace = _workspace(store, data_llm, insight_llm)

    data_task = asyncio.create_task(workspace.generate_data("more data"))
    insight_task = asyncio.create_task(workspace.generate_insights())
    await _settle()

    assert workspace.is_generating_data
    assert workspace.is_generating_insights

    insight_llm.pending[0].set_result("Feb es el mes más bajo.")
    assert await insight_task == "Feb es el mes más bajo."
    assert workspace.is_generating_data

    data_llm.pending[0].set_result(_points("X", "Y"))
    assert await data_task is True
    assert [item.name for item in store.data_items] == ["X", "Y"]


@pytest.mark.asyncio
async def test_generate_insights_sets_text(store, make_llm):
    workspace = _workspace(store, make_llm("Marzo y abril lideran."))

    assert await workspace.generate_insights() == "Marzo y abril lideran."
    assert workspace.insights == "Marzo y abril lideran."
    assert store.data_items  # unchanged seed data


@pytest.mark.asyncio
async def test_generate_insights_without_data_is_a_no_op(store, make_llm):
    llm = make_llm()
    store.replace_data([])
    workspace = _workspace(store, llm)

    assert not workspace.can_generate_insights
    assert await workspace.generate_insights() is None
    assert llm.calls == []


@pytest.mark.asyncio
async def test_insight_failure_surfaces_message(store, make_llm):
    workspace = _workspace(store, make_llm(TransportError("quota")))

    assert await workspace.generate_insights() is None
    assert workspace.error == INSIGHT_GENERATION_FAILED
    assert workspace.insights is None


@pytest.mark.asyncio
async def test_new_data_request_clears_previous_insight(store, make_llm):
    workspace = _workspace(store, make_llm("Análisis", _points("A")))
    await workspace.generate_insights()

    await workspace.generate_data("new data")

    assert workspace.insights is None


def test_chart_view_and_export_name(store):
    workspace = _workspace(store, None)

    assert isinstance(workspace.chart_view(), ChartView)
    assert workspace.export_filename("png") == "Informe_de_Ventas_T1-T2.png"

    store.replace_data([])
    assert isinstance(workspace.chart_view(), EmptyChart)


class _BrokenModel:
    async def generate_content_async(self, prompt, generation_config=None):
        raise RuntimeError("candidate stopped: SAFETY")


@pytest.mark.asyncio
async def test_unexpected_sdk_error_surfaces_as_data_error(store, monkeypatch):
    monkeypatch.setattr(llm_client, "get_gemini_model", lambda name: _BrokenModel())
    workspace = ChartWorkspace(store, DataSynthesisService(), InsightService())
    before = store.data_items

    assert await workspace.generate_data("anything") is False

    assert workspace.error == DATA_GENERATION_FAILED
    assert store.data_items == before
    assert not workspace.is_generating_data


@pytest.mark.asyncio
async def test_unexpected_sdk_error_surfaces_as_insight_error(store, monkeypatch):
    monkeypatch.setattr(llm_client, "get_gemini_model", lambda name: _BrokenModel())
    workspace = ChartWorkspace(store, DataSynthesisService(), InsightService())

    assert await workspace.generate_insights() is None

    assert workspace.error == INSIGHT_GENERATION_FAILED


def test_create_workspace_restores_persisted_state(tmp_path, sample_items):
    path = tmp_path / "state" / "chartcraft.db"
    earlier = ChartStateStore(SQLiteKeyValueStorage(path))
    earlier.replace_data(sample_items)
    earlier.replace_options({"title": "Trimestres", "type": "pie"})

    workspace = create_workspace(path)

    assert list(workspace.store.data_items) == sample_items
    assert workspace.store.chart_options.title == "Trimestres"
    assert workspace.store.chart_options.type is ChartType.PIE
    assert workspace.error is None


def test_create_workspace_survives_oversized_stored_value(tmp_path):
    path = tmp_path / "chartcraft.db"
    SQLiteKeyValueStorage(path).set(
        "chartData", '[{"id": "1", "name": "A", "value": 1' + "0" * 400 + "}]"
    )

    workspace = create_workspace(path)

    assert workspace.store.data_items
    assert all(abs(item.value) < 1e15 for item in workspace.store.data_items)
