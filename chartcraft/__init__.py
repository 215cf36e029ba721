"""chartcraft - AI-assisted chart authoring core (data synthesis, insights, chart state)"""

from __future__ import annotations

__version__ = "0.1.0"


def __getattr__(name: str):
    """
    Lazy imports so that importing the domain model does not load the Gemini SDKs.
    """
    if name in ("ChartOptions", "ChartType", "DataItem"):
        from chartcraft.charts import models

        return getattr(models, name)

    if name in ("DataSynthesisService", "InsightService"):
        from chartcraft import services

        return getattr(services, name)

    if name == "ChartStateStore":
        from chartcraft.state.store import ChartStateStore

        return ChartStateStore

    if name == "ChartWorkspace":
        from chartcraft.workspace import ChartWorkspace

        return ChartWorkspace

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ChartOptions",
    "ChartStateStore",
    "ChartType",
    "ChartWorkspace",
    "DataItem",
    "DataSynthesisService",
    "InsightService",
]
