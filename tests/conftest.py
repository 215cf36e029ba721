"""
Shared fixtures for chartcraft tests.

The inference call is always faked: services take the LLM callable as a
constructor argument, so no test touches the network or needs credentials.
"""

from __future__ import annotations

import pytest

from chartcraft.charts.models import ChartOptions, ChartType, DataItem
from chartcraft.infrastructure.storage import InMemoryStorage
from chartcraft.observability.telemetry import reset_telemetry
from chartcraft.state.store import ChartStateStore


class FakeLLM:
    """Async stand-in for chartcraft.llm.client.call_llm.

    Responses are consumed in order; an exception instance is raised instead
    of returned.
    """

    def __init__(self, *responses: str | BaseException) -> None:
        self.responses = list(responses)
        self.calls: list[dict] = []

    async def __call__(
        self,
        prompt: str,
        *,
        temperature: float,
        response_mime_type: str | None = None,
        counter_prefix: str = "llm",
    ) -> str:
        self.calls.append(
            {
                "prompt": prompt,
                "temperature": temperature,
                "response_mime_type": response_mime_type,
                "counter_prefix": counter_prefix,
            }
        )
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture(autouse=True)
def _clean_telemetry():
    reset_telemetry()
    yield
    reset_telemetry()


@pytest.fixture
def make_llm():
    """Factory: ``make_llm("response text", TransportError("down"), ...)``."""
    return FakeLLM


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def store(storage) -> ChartStateStore:
    return ChartStateStore(storage)


@pytest.fixture
def sample_items() -> list[DataItem]:
    return [
        DataItem(id="a", name="Q1", value=120),
        DataItem(id="b", name="Q2", value=98.5),
        DataItem(id="c", name="Q3", value=143),
    ]


@pytest.fixture
def bar_options() -> ChartOptions:
    return ChartOptions(title="Ventas", type=ChartType.BAR, color="#3b82f6")
