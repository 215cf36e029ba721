"""
Data Synthesis Service - natural-language prompt to chart-safe DataItems.

Pipeline: prompt template -> Gemini (JSON mode, temperature 0.5) -> fence
stripping + JSON decode -> schema validation -> fresh ids.

The service never touches application state; the caller applies the returned
items to the store, so a failure at any stage leaves the chart unchanged.
"""

from __future__ import annotations

from chartcraft.charts.models import DataItem
from chartcraft.config import (
    JSON_MIME_TYPE,
    SYNTHESIS_MAX_POINTS,
    SYNTHESIS_MIN_POINTS,
    SYNTHESIS_TEMPERATURE,
)
from chartcraft.errors import DATA_GENERATION_FAILED, ChartcraftError, ValidationError
from chartcraft.llm.client import LLMCall, call_llm
from chartcraft.llm.prompts import DATA_SYNTHESIS_PROMPT, PromptLoader, get_prompt_loader
from chartcraft.llm.response_parser import parse_json_response
from chartcraft.observability.logging import get_logger
from chartcraft.observability.telemetry import counter, log_event
from chartcraft.services.validation import validate_generated_items

logger = get_logger(__name__)


class DataSynthesisService:
    """Generate chart data points from a free-text description."""

    def __init__(self, llm: LLMCall = call_llm, prompts: PromptLoader | None = None):
        self._llm = llm
        self._prompts = prompts or get_prompt_loader()

    def build_prompt(self, prompt_text: str) -> str:
        return self._prompts.render(
            DATA_SYNTHESIS_PROMPT,
            user_prompt=prompt_text,
            min_points=SYNTHESIS_MIN_POINTS,
            max_points=SYNTHESIS_MAX_POINTS,
        )

    async def synthesize(self, prompt_text: str) -> list[DataItem]:
        """
        Ask the model for data matching ``prompt_text``.

        Args:
            prompt_text: User description, non-empty. Skipping empty input is
                the caller's job; an empty string here is a programming error.

        Returns:
            Validated items in model order, each with a freshly generated id.

        Raises:
            ValueError: If prompt_text is empty.
            TransportError | ParseError | ValidationError: With the
                data-generation ``user_message``; the category is logged.
        """
        if not prompt_text or not prompt_text.strip():
            raise ValueError("prompt_text must be non-empty")

        try:
            raw = await self._llm(
                self.build_prompt(prompt_text),
                temperature=SYNTHESIS_TEMPERATURE,
                response_mime_type=JSON_MIME_TYPE,
                counter_prefix="synthesis",
            )
            payload = parse_json_response(raw)

            outcome = validate_generated_items(payload)
            if not outcome.ok:
                logger.warning("Generated data failed validation: %s", outcome.reason)
                raise ValidationError(f"Generated data rejected: {outcome.reason}")

        except ChartcraftError as e:
            counter(f"synthesis.error.{e.category}")
            logger.error("Error generating chart data (%s): %s", e.category, e)
            raise e.for_operation(DATA_GENERATION_FAILED) from e

        counter("synthesis.success")
        log_event("synthesis.complete", points=len(outcome.items))
        return outcome.items
