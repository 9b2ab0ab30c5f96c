"""
Configuration module - Centralized settings management.

This module provides type-safe configuration management using Pydantic,
supporting environment variables, YAML files, and explicit overrides.

Usage:
    from intent_replay.config import get_settings, load_config
    
    # Get global settings (loaded once)
    settings = get_settings()
    
    # Or load fresh settings with overrides
    settings = load_config(driver={"locate_timeout_ms": 2000})

Environment Variables:
    INTENT_REPLAY__DRIVER__LOCATE_TIMEOUT_MS=2000
    INTENT_REPLAY__EXECUTION__NAVIGATE_RETRIES=5
    INTENT_REPLAY__LOGGING__LEVEL=DEBUG
"""

from intent_replay.config.settings import (
    Settings,
    DriverSettings,
    ExecutionSettings,
    LoggingSettings,
)
from intent_replay.config.loader import ConfigLoader, load_config

# Global settings singleton
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).
    
    Settings are loaded once from environment variables and config files.
    Call reset_settings() to reload.
    
    Returns:
        Global Settings instance
    """
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def reset_settings() -> None:
    """Reset the global settings (forces reload on next get_settings())."""
    global _settings
    _settings = None


__all__ = [
    "Settings",
    "DriverSettings",
    "ExecutionSettings",
    "LoggingSettings",
    "ConfigLoader",
    "load_config",
    "get_settings",
    "reset_settings",
]
