"""Runtime services: telemetry and configuration."""

from . import telemetry
from .settings import Settings, get_settings, reload_settings

__all__ = ["Settings", "get_settings", "reload_settings", "telemetry"]
