"""AI-backed services: data synthesis from a prompt and insight generation."""

from __future__ import annotations

from chartcraft.services.insights import InsightService
from chartcraft.services.synthesis import DataSynthesisService
from chartcraft.services.validation import ValidationOutcome, validate_generated_items

__all__ = [
    "DataSynthesisService",
    "InsightService",
    "ValidationOutcome",
    "validate_generated_items",
]
