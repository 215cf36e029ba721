"""
Gemini Model Manager - cached model handles shared by both AI services.

Supports two backends:
  1. google-generativeai (default) — uses GOOGLE_API_KEY / GEMINI_API_KEY
  2. Vertex AI SDK — uses GOOGLE_CLOUD_PROJECT + application default credentials,
     picked when no API key is configured

Credentials only ever come from the environment.
"""

from __future__ import annotations

import os
from functools import lru_cache

from chartcraft.infrastructure.env import get_api_key
from chartcraft.infrastructure.settings import GEMINI_LOCATION, GEMINI_MODEL, GOOGLE_CLOUD_PROJECT
from chartcraft.observability.logging import get_logger

logger = get_logger(__name__)


class GeminiInitializationError(RuntimeError):
    """Raised when Gemini model cannot be initialized."""


@lru_cache(maxsize=4)
def get_gemini_model(model_name: str = GEMINI_MODEL):
    """
    Get or create a shared Gemini model instance.

    Uses @lru_cache so the data synthesis and insight services share one
    handle per model name.

    Returns:
        GenerativeModel: either ``google.generativeai.GenerativeModel`` or
        ``vertexai.generative_models.GenerativeModel``; both expose
        ``generate_content_async(prompt, generation_config=...)``.

    Raises:
        GeminiInitializationError: If model cannot be initialized
    """
    api_key = get_api_key()

    if api_key:
        try:
            import google.generativeai as genai

            genai.configure(api_key=api_key)
            model = genai.GenerativeModel(model_name)

            logger.info("Initialized Gemini model (google-generativeai): model=%s", model_name)
            return model

        except ImportError as e:
            raise GeminiInitializationError(
                "google-generativeai is not installed but an API key is configured."
            ) from e
        except Exception as e:
            logger.error("Failed to initialize Gemini model: %s", e)
            raise GeminiInitializationError(f"Failed to initialize Gemini: {e}") from e

    # No API key: Vertex AI with application default credentials
    project = os.getenv("GOOGLE_CLOUD_PROJECT") or GOOGLE_CLOUD_PROJECT
    location = os.getenv("GEMINI_LOCATION", "") or GEMINI_LOCATION or "us-central1"
    if not project:
        raise GeminiInitializationError(
            "Neither GOOGLE_API_KEY nor GOOGLE_CLOUD_PROJECT is set. "
            "Configure an API key or a Vertex AI project."
        )

    try:
        import vertexai
        from vertexai.generative_models import GenerativeModel

        vertexai.init(project=project, location=location)
        model = GenerativeModel(model_name)

        logger.info(
            "Initialized Gemini model (Vertex AI): project=%s, location=%s, model=%s",
            project,
            location,
            model_name,
        )
        return model

    except ImportError as e:
        raise GeminiInitializationError(
            "google-cloud-aiplatform is not installed; cannot use Vertex AI."
        ) from e
    except Exception as e:
        logger.error("Failed to initialize Gemini model: %s", e)
        raise GeminiInitializationError(f"Failed to initialize Gemini: {e}") from e


def clear_model_cache() -> None:
    """
    Clear the cached model instances.

    Useful for testing or when credentials change.
    """
    get_gemini_model.cache_clear()
    logger.info("Cleared Gemini model cache")
