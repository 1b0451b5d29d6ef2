"""Runtime services shared across the history tree package."""

from . import telemetry

__all__ = ["telemetry"]
