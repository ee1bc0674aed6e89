"""Runtime services (telemetry) shared by every sipp layer."""

from . import telemetry

__all__ = ["telemetry"]
