"""
Response parser for model output that should contain JSON.

Models sometimes wrap their answer in a markdown code fence even when asked
not to (and even in JSON response mode). A single surrounding fence is
stripped; anything else must be valid JSON as-is.
"""

from __future__ import annotations

import json
import re
from typing import Any

from chartcraft.errors import ParseError
from chartcraft.observability.logging import get_logger
from chartcraft.observability.telemetry import counter

logger = get_logger(__name__)

# ```lang\n<body>\n```  (language tag optional)
_FENCE_RE = re.compile(
    r"^```[ \t]*(?P<lang>[\w.+#-]*)[ \t]*\r?\n(?P<body>.*?)\r?\n?[ \t]*```$",
    re.DOTALL,
)
# ```<body>```  on a single line, no language tag
_INLINE_FENCE_RE = re.compile(r"^```(?P<body>[^\n]*?)```$")


def strip_code_fence(raw: str) -> str:
    """Return the fenced body if ``raw`` is one fenced block, else ``raw`` trimmed."""
    text = raw.strip()
    match = _FENCE_RE.match(text) or _INLINE_FENCE_RE.match(text)
    if match and match.group("body").strip():
        return match.group("body").strip()
    return text


def parse_json_response(raw: str) -> Any:
    """
    Decode a model response as JSON.

    Args:
        raw: Response text, optionally wrapped in a markdown code fence

    Returns:
        The decoded value (list, dict, str, number, bool or None); callers
        validate the shape they expect.

    Raises:
        ParseError: If the text (after fence stripping) is not valid JSON.
            The decoder diagnostic is logged and kept as the internal
            message; ``user_message`` stays generic.
    """
    if not isinstance(raw, str):
        counter("llm.parse_error")
        logger.warning("Failed to parse JSON response: expected str, got %s", type(raw).__name__)
        raise ParseError(f"Response is not text: {type(raw).__name__}")

    candidate = strip_code_fence(raw)
    try:
        return json.loads(candidate)
    except (ValueError, RecursionError) as e:
        counter("llm.parse_error")
        logger.warning("Failed to parse JSON response: %s", e)
        raise ParseError(f"Invalid JSON in model response: {e}") from e
