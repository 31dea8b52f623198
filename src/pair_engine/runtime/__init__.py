"""Runtime services: telemetry and environment settings."""

from . import telemetry
from .settings import EngineSettings, load_settings

__all__ = ["telemetry", "EngineSettings", "load_settings"]
