"""Gemini access: model handles, the async call wrapper, prompts and response parsing."""
