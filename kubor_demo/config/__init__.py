"""Configuration package for runtime settings, parsing helpers and logging setup."""

from .durations import DURATION_MAX, config_format_duration, config_parse_duration, config_parse_listen_address
from .log_setup import config_configure_logging
from .settings import AppSettings, SettingsLoadError, config_load_settings

__all__ = [
    "DURATION_MAX",
    "AppSettings",
    "SettingsLoadError",
    "config_configure_logging",
    "config_format_duration",
    "config_load_settings",
    "config_parse_duration",
    "config_parse_listen_address",
]
