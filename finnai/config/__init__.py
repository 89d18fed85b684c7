"""Configuration package."""

from finnai.config.settings import (
    AppSettings,
    GeminiSettings,
    InsightSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "GeminiSettings",
    "InsightSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
