"""Centralized configuration for chartcraft.

Re-exports everything from chartcraft.infrastructure.settings, then adds typed
constants for the AI services, storage keys and validation limits.
Environment variable overrides use safe defaults so the package works without
extra env configuration (apart from Gemini credentials).
"""

from __future__ import annotations

import os

from chartcraft.infrastructure.settings import *  # noqa: F401, F403  — re-export settings

# --- LLM ---
LLM_TIMEOUT_SECONDS: int = int(os.getenv("CHARTCRAFT_LLM_TIMEOUT", "30"))
SYNTHESIS_TEMPERATURE: float = 0.5
INSIGHT_TEMPERATURE: float = 0.7
JSON_MIME_TYPE: str = "application/json"
INSIGHT_LANGUAGE: str = os.getenv("CHARTCRAFT_INSIGHT_LANGUAGE", "Spanish")

# --- Data synthesis ---
SYNTHESIS_MIN_POINTS: int = 5
SYNTHESIS_MAX_POINTS: int = 12
MAX_ABS_VALUE: float = float(os.getenv("CHARTCRAFT_MAX_ABS_VALUE", "1e15"))

# --- Storage keys (owned by ChartStateStore) ---
STORAGE_KEY_DATA: str = "chartData"
STORAGE_KEY_OPTIONS: str = "chartOptions"

# --- Export ---
EXPORT_DEFAULT_NAME: str = "grafico"
EXPORT_FORMATS: tuple[str, ...] = ("png", "pdf")
