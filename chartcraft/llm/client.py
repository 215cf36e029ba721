"""Async Gemini call shared by the data synthesis and insight services.

Every failure of the remote call (init, timeout, quota, server error, blocked
or empty answer) leaves this module as a TransportError, so services only have
to distinguish transport / parse / validation. There is no automatic retry:
the user decides whether to re-run a generation.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Protocol

from chartcraft.config import GEMINI_MAX_TOKENS, GEMINI_MODEL, LLM_TIMEOUT_SECONDS
from chartcraft.errors import EmptyResponseError, TransportError
from chartcraft.llm.gemini import GeminiInitializationError, get_gemini_model
from chartcraft.observability.logging import get_logger
from chartcraft.observability.telemetry import counter, time_block

logger = get_logger(__name__)


class LLMCall(Protocol):
    """Signature of :func:`call_llm`; services accept any callable matching it."""

    def __call__(
        self,
        prompt: str,
        *,
        temperature: float,
        response_mime_type: str | None = None,
        counter_prefix: str = "llm",
    ) -> Awaitable[str]: ...


def _response_text(response: object) -> str:
    # .text raises ValueError when the candidate was blocked or has no parts
    try:
        text = response.text  # type: ignore[attr-defined]
    except (ValueError, AttributeError) as e:
        raise EmptyResponseError(f"LLM response has no text: {e}") from e
    if not isinstance(text, str) or not text.strip():
        raise EmptyResponseError("LLM returned an empty response")
    return text


async def call_llm(
    prompt: str,
    *,
    temperature: float,
    response_mime_type: str | None = None,
    counter_prefix: str = "llm",
    model_name: str = GEMINI_MODEL,
) -> str:
    """Send one prompt to Gemini and return the response text.

    Args:
        prompt: Full prompt text.
        temperature: Sampling temperature for this call.
        response_mime_type: e.g. "application/json" to request JSON mode.
            A hint only; callers still parse and validate the output.
        counter_prefix: Telemetry counter prefix ("synthesis", "insights").
        model_name: Gemini model identifier.

    Returns:
        Non-empty response text.

    Raises:
        TransportError: On any failure to obtain a usable response
            (EmptyResponseError when the model answered with no text).
    """
    from google.api_core.exceptions import (
        DeadlineExceeded,
        GoogleAPIError,
        InternalServerError,
        PermissionDenied,
        ResourceExhausted,
        ServiceUnavailable,
        Unauthenticated,
    )

    generation_config: dict[str, object] = {
        "temperature": temperature,
        "max_output_tokens": GEMINI_MAX_TOKENS,
    }
    if response_mime_type is not None:
        generation_config["response_mime_type"] = response_mime_type

    try:
        model = get_gemini_model(model_name)
        with time_block(f"{counter_prefix}.llm.latency"):
            response = await asyncio.wait_for(
                model.generate_content_async(prompt, generation_config=generation_config),
                timeout=LLM_TIMEOUT_SECONDS,
            )
        text = _response_text(response)
    except EmptyResponseError:
        counter(f"{counter_prefix}.llm.empty_response")
        logger.warning("LLM returned no usable text (model=%s)", model_name)
        raise
    except GeminiInitializationError as e:
        counter(f"{counter_prefix}.llm.init_error")
        logger.error("Gemini not available: %s", e)
        raise TransportError(f"Gemini not available: {e}") from e
    except (asyncio.TimeoutError, DeadlineExceeded) as e:
        counter(f"{counter_prefix}.llm.timeout")
        logger.warning("LLM call timed out after %ds", LLM_TIMEOUT_SECONDS)
        raise TransportError(f"LLM call timed out: {e}") from e
    except (Unauthenticated, PermissionDenied) as e:
        counter(f"{counter_prefix}.llm.auth_error")
        logger.error("LLM call rejected, check the API key: %s", e)
        raise TransportError(f"LLM authentication failed: {e}") from e
    except ResourceExhausted as e:
        counter(f"{counter_prefix}.llm.rate_limited")
        logger.warning("LLM rate limited (429): %s", e)
        raise TransportError(f"LLM rate limited: {e}") from e
    except (ServiceUnavailable, InternalServerError) as e:
        counter(f"{counter_prefix}.llm.service_unavailable")
        logger.warning("LLM service error: %s", e)
        raise TransportError(f"LLM service unavailable: {e}") from e
    except GoogleAPIError as e:
        counter(f"{counter_prefix}.llm.api_error")
        logger.error("LLM call failed: %s", e)
        raise TransportError(f"LLM call failed: {e}") from e
    except (ConnectionError, OSError) as e:
        counter(f"{counter_prefix}.llm.connection_error")
        logger.error("LLM connection failed: %s", e)
        raise TransportError(f"LLM connection failed: {e}") from e
    except Exception as e:
        # SDK-specific errors (blocked prompt, stopped candidate, bad request args)
        counter(f"{counter_prefix}.llm.unexpected_error")
        logger.error("LLM call failed unexpectedly: %s: %s", type(e).__name__, e)
        raise TransportError(f"LLM call failed: {type(e).__name__}: {e}") from e

    counter(f"{counter_prefix}.llm.success")
    return text
