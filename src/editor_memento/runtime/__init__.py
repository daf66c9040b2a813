"""Runtime services: settings and telemetry."""

from .settings import HistorySettings

__all__ = ["HistorySettings", "settings", "telemetry"]
