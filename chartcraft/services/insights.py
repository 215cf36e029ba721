"""
Insight Service - short natural-language analysis of the current chart.

Read-only with respect to application state: it receives the data and
options, and returns advisory text for display.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from chartcraft.charts.models import ChartOptions, DataItem
from chartcraft.config import INSIGHT_LANGUAGE, INSIGHT_TEMPERATURE
from chartcraft.errors import INSIGHT_GENERATION_FAILED, ChartcraftError, EmptyResponseError
from chartcraft.llm.client import LLMCall, call_llm
from chartcraft.llm.prompts import CHART_INSIGHTS_PROMPT, PromptLoader, get_prompt_loader
from chartcraft.observability.logging import get_logger
from chartcraft.observability.telemetry import counter, log_event

logger = get_logger(__name__)


class InsightService:
    def __init__(
        self,
        llm: LLMCall = call_llm,
        prompts: PromptLoader | None = None,
        language: str = INSIGHT_LANGUAGE,
    ):
        self._llm = llm
        self._prompts = prompts or get_prompt_loader()
        self.language = language

    def build_prompt(self, data: Sequence[DataItem], options: ChartOptions) -> str:
        # Only name/value go to the model; renderer fields like ``fill`` are noise
        data_json = json.dumps([item.name_value() for item in data], ensure_ascii=False)
        return self._prompts.render(
            CHART_INSIGHTS_PROMPT,
            title=options.title,
            chart_type=options.type.value,
            data_json=data_json,
            language=self.language,
        )

    async def summarize(self, data: Sequence[DataItem], options: ChartOptions) -> str:
        """
        Summarize the chart in one or two observations.

        Returns:
            The model text verbatim.

        Raises:
            TransportError: With the insight ``user_message`` when the call
                fails or the answer is empty.
        """
        try:
            text = await self._llm(
                self.build_prompt(data, options),
                temperature=INSIGHT_TEMPERATURE,
                counter_prefix="insights",
            )
            if not isinstance(text, str) or not text.strip():
                raise EmptyResponseError("Insight response was empty")
        except ChartcraftError as e:
            counter(f"insights.error.{e.category}")
            logger.error("Error generating chart insights (%s): %s", e.category, e)
            raise e.for_operation(INSIGHT_GENERATION_FAILED) from e

        counter("insights.success")
        log_event("insights.complete", chart_type=options.type.value, points=len(data))
        return text
