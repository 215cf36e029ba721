"""
Environment loader for chartcraft.

Side Effects:
    - Loads a .env file (project root first, then current directory) once

Usage:
    from chartcraft.infrastructure.env import ensure_env_loaded, get_api_key

    ensure_env_loaded()
    api_key = get_api_key()
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

_ENV_LOADED = False


def ensure_env_loaded(env_path: Path | None = None) -> None:
    """
    Ensure the .env file is loaded exactly once.

    Existing process environment variables always win over .env values.
    """
    global _ENV_LOADED
    if _ENV_LOADED:
        return

    if env_path is None:
        current = Path(__file__).parent
        while current != current.parent:
            env_candidate = current / ".env"
            if env_candidate.exists():
                env_path = env_candidate
                break
            current = current.parent

    if env_path and env_path.exists():
        load_dotenv(env_path)
    else:
        load_dotenv()
    _ENV_LOADED = True


def get_api_key() -> str | None:
    """Gemini API key, read fresh so late .env loading is picked up.

    GOOGLE_API_KEY wins; GEMINI_API_KEY is accepted for Vite-style setups.
    """
    ensure_env_loaded()
    return os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY") or None
