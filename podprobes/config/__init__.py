"""
Pod Identity Probes Configuration Module
Centralized configuration management using pydantic-settings.
"""

from podprobes.config.settings import (
    Settings,
    AppSettings,
    ProbeSettings,
    get_settings,
    load_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "AppSettings",
    "ProbeSettings",
    "get_settings",
    "load_settings",
    "reload_settings",
]
