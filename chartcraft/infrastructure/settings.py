"""
Application-wide settings and environment configuration
"""

from __future__ import annotations

import os
from pathlib import Path

from chartcraft.infrastructure.env import ensure_env_loaded

ensure_env_loaded()

# Logging
LOG_LEVEL = os.getenv("CHARTCRAFT_LOG_LEVEL", "INFO")

# Google Cloud / Gemini
GOOGLE_CLOUD_PROJECT = os.getenv("GOOGLE_CLOUD_PROJECT")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_LOCATION = os.getenv("GEMINI_LOCATION", "us-central1")
GEMINI_MAX_TOKENS = int(os.getenv("GEMINI_MAX_TOKENS", "2048"))

# Durable state (SQLite key/value file)
STORAGE_PATH = Path(
    os.getenv("CHARTCRAFT_STORAGE_PATH", str(Path.home() / ".chartcraft" / "chartcraft.db"))
)
