"""
Chart workspace - the glue between a presentation layer and the core.

Holds the transient UI state that is not persisted (in-flight flags, the last
error message, the last insight) and drives the two AI flows:

    generate_data:     prompt -> DataSynthesisService -> store.replace_data
    generate_insights: store snapshot -> InsightService -> self.insights

The flows are independent and may overlap. Within one flow, requests are
sequence-stamped: a response that resolves after a newer request of the same
kind was issued is dropped, so a slow early answer can never overwrite a
later one.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from chartcraft.charts.export import export_filename
from chartcraft.charts.rendering import ChartView, EmptyChart, build_chart_view
from chartcraft.config import STORAGE_PATH
from chartcraft.errors import ChartcraftError
from chartcraft.infrastructure.sequencing import RequestSequencer
from chartcraft.infrastructure.storage import SQLiteKeyValueStorage
from chartcraft.observability.logging import get_logger
from chartcraft.observability.telemetry import counter
from chartcraft.services.insights import InsightService
from chartcraft.services.synthesis import DataSynthesisService
from chartcraft.state.store import ChartStateStore

logger = get_logger(__name__)


class ChartWorkspace:
    def __init__(
        self,
        store: ChartStateStore,
        synthesis: DataSynthesisService,
        insights: InsightService,
    ) -> None:
        self.store = store
        self.synthesis = synthesis
        self.insight_service = insights

        self.error: str | None = None
        self.insights: str | None = None

        self._data_requests = RequestSequencer("data")
        self._insight_requests = RequestSequencer("insights")

    # In-flight indicators, one per flow
    @property
    def is_generating_data(self) -> bool:
        return self._data_requests.in_flight

    @property
    def is_generating_insights(self) -> bool:
        return self._insight_requests.in_flight

    @property
    def can_generate_insights(self) -> bool:
        return bool(self.store.data_items) and not self.is_generating_insights

    async def generate_data(self, prompt: str) -> bool:
        """
        Replace the chart data with AI-generated points.

        Returns:
            True if the store was updated. False for a blank prompt, a
            failure (``self.error`` holds the message to show) or a response
            superseded by a newer request.
        """
        if not prompt or not prompt.strip():
            return False

        ticket = self._data_requests.begin()
        self.error = None
        self.insights = None
        try:
            items = await self.synthesis.synthesize(prompt)
        except ChartcraftError as e:
            if self._data_requests.is_current(ticket):
                self.error = e.user_message
            return False
        finally:
            self._data_requests.finish(ticket)

        if not self._data_requests.is_current(ticket):
            self._drop_stale("data", ticket.number)
            return False

        self.store.replace_data(items)
        return True

    async def generate_insights(self) -> str | None:
        """
        Ask for an analysis of the current chart.

        Returns:
            The insight text, or None when there is no data, the call failed
            (``self.error`` is set) or a newer insight request superseded it.
        """
        data = self.store.data_items
        if not data:
            return None

        options = self.store.chart_options
        ticket = self._insight_requests.begin()
        self.error = None
        self.insights = None
        try:
            text = await self.insight_service.summarize(data, options)
        except ChartcraftError as e:
            if self._insight_requests.is_current(ticket):
                self.error = e.user_message
            return None
        finally:
            self._insight_requests.finish(ticket)

        if not self._insight_requests.is_current(ticket):
            self._drop_stale("insights", ticket.number)
            return None

        self.insights = text
        return text

    def chart_view(self) -> ChartView | EmptyChart:
        return build_chart_view(self.store.data_items, self.store.chart_options)

    def export_filename(self, fmt: Literal["png", "pdf"]) -> str:
        return export_filename(self.store.chart_options.title, fmt)

    @staticmethod
    def _drop_stale(kind: str, number: int) -> None:
        counter(f"workspace.{kind}.stale_dropped")
        logger.info("Dropping stale %s response (request #%d was superseded)", kind, number)


def create_workspace(storage_path: Path | str | None = None) -> ChartWorkspace:
    """Wire the default stack: SQLite storage, Gemini-backed services, loaded store."""
    store = ChartStateStore(SQLiteKeyValueStorage(storage_path or STORAGE_PATH))
    store.load()
    return ChartWorkspace(store, DataSynthesisService(), InsightService())
