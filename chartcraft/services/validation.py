"""
Decode-then-validate step for AI-generated chart data.

JSON response mode is only a hint to the model, so the decoded payload is
checked element by element before anything downstream sees it. The result is
a tagged outcome: either every element is valid and the typed items are
returned, or nothing is returned together with the first failure reason.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from chartcraft.charts.models import DataItem, check_numeric_value
from chartcraft.config import MAX_ABS_VALUE


def new_item_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class ValidationOutcome:
    ok: bool
    items: list[DataItem] = field(default_factory=list)
    reason: str | None = None

    @classmethod
    def success(cls, items: list[DataItem]) -> ValidationOutcome:
        return cls(ok=True, items=items)

    @classmethod
    def failure(cls, reason: str) -> ValidationOutcome:
        return cls(ok=False, reason=reason)


def _element_error(index: int, element: Any, max_abs_value: float) -> str | None:
    if not isinstance(element, dict):
        return f"element {index} is not an object ({type(element).__name__})"
    if not isinstance(element.get("name"), str):
        return f"element {index} has a non-string 'name'"
    try:
        check_numeric_value(element.get("value"), max_abs_value)
    except ValueError as e:
        return f"element {index} 'value': {e}"
    return None


def validate_generated_items(
    payload: Any,
    *,
    id_factory: Callable[[], str] = new_item_id,
    max_abs_value: float = MAX_ABS_VALUE,
) -> ValidationOutcome:
    """
    Validate a decoded model payload and turn it into DataItems.

    Rules:
        - payload must be a JSON array
        - each element must be an object with a string ``name`` and a finite
          numeric ``value`` (bools rejected) within ``max_abs_value``, which
          can only tighten the MAX_ABS_VALUE bound DataItem itself enforces
        - every item gets a fresh id from ``id_factory``; any id supplied by
          the model is discarded
        - other fields pass through unchanged

    Returns:
        ValidationOutcome; never raises for bad payloads.
    """
    if not isinstance(payload, list):
        return ValidationOutcome.failure(f"expected a JSON array, got {type(payload).__name__}")

    for index, element in enumerate(payload):
        error = _element_error(index, element, max_abs_value)
        if error is not None:
            return ValidationOutcome.failure(error)

    items = [DataItem.model_validate({**element, "id": id_factory()}) for element in payload]

    ids = {item.id for item in items}
    if len(ids) != len(items):
        return ValidationOutcome.failure("id factory produced duplicate ids")

    return ValidationOutcome.success(items)
