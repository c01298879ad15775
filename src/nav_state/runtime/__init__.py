"""Runtime services shared by the navigation containers."""

from . import settings, telemetry

__all__ = ["settings", "telemetry"]
