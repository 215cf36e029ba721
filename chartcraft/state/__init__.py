"""Application state: the chart state store."""

from __future__ import annotations

from chartcraft.state.store import ChartStateStore

__all__ = ["ChartStateStore"]
