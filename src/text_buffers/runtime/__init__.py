"""Runtime services (logging, profiling) shared by the buffer engines."""

from . import telemetry

__all__ = ["telemetry"]
