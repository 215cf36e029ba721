"""
Prompt Management Module

Loads LLM prompt templates from the .txt files next to this module so the
wording can be tuned without touching service code.
"""

from __future__ import annotations

from pathlib import Path

PROMPTS_DIR = Path(__file__).parent

DATA_SYNTHESIS_PROMPT = "data_synthesis"
CHART_INSIGHTS_PROMPT = "chart_insights"


class PromptLoader:
    """Load and cache prompt templates from files"""

    def __init__(self, prompts_dir: Path = PROMPTS_DIR):
        self.prompts_dir = prompts_dir
        self._cache: dict[str, str] = {}

    def load_prompt(self, prompt_name: str) -> str:
        """
        Load a prompt template from file.

        Args:
            prompt_name: Name of the prompt file (without .txt extension)

        Returns:
            Prompt template string
        """
        if prompt_name not in self._cache:
            prompt_path = self.prompts_dir / f"{prompt_name}.txt"

            if not prompt_path.exists():
                raise FileNotFoundError(f"Prompt file not found: {prompt_path}")

            with open(prompt_path, encoding="utf-8") as f:
                self._cache[prompt_name] = f.read()

        return self._cache[prompt_name]

    def render(self, prompt_name: str, **kwargs: object) -> str:
        """Load ``prompt_name`` and substitute its ``{placeholders}``."""
        return self.load_prompt(prompt_name).format(**kwargs)


_loader: PromptLoader | None = None


def get_prompt_loader() -> PromptLoader:
    """Shared loader instance"""
    global _loader
    if _loader is None:
        _loader = PromptLoader()
    return _loader


__all__ = [
    "CHART_INSIGHTS_PROMPT",
    "DATA_SYNTHESIS_PROMPT",
    "PromptLoader",
    "get_prompt_loader",
]
