"""
Settings - Pydantic models for type-safe configuration.

This module defines all configuration settings as Pydantic models,
providing validation, type hints, and automatic environment variable loading.

Example:
    >>> from intent_replay.config import Settings, load_config
    >>> settings = load_config()  # Loads from env, yaml, and defaults
    >>> print(settings.execution.navigate_retries)
    3
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DriverSettings(BaseModel):
    """
    Browser driver timeouts.
    
    Attributes:
        timeout_ms: Default timeout for element actions (click, fill, select)
        locate_timeout_ms: Timeout for a single locator query
        navigation_timeout_ms: Timeout for a single navigation attempt
        wait_until: Load state a navigation waits for
    """
    timeout_ms: int = Field(default=30000, ge=100, le=300000)
    locate_timeout_ms: int = Field(default=5000, ge=100, le=120000)
    navigation_timeout_ms: int = Field(default=30000, ge=1000, le=300000)
    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = "domcontentloaded"


class ExecutionSettings(BaseModel):
    """
    Engine behavior settings.
    
    Attributes:
        navigate_retries: Attempts per navigation before giving up
        navigate_backoff_ms: Fixed delay between navigation attempts
        preflight_poll_interval_ms: Poll interval while a pre-flight check waits
        default_wait_ms: Sleep used by a wait step that names no condition
        semantic_timeout_ms: Bound for one semantic executor call
        mask_sensitive_values: Mask password-like values in log lines
    """
    navigate_retries: int = Field(default=3, ge=1, le=10)
    navigate_backoff_ms: int = Field(default=2000, ge=0, le=60000)
    preflight_poll_interval_ms: int = Field(default=250, ge=10, le=5000)
    default_wait_ms: int = Field(default=2000, ge=0, le=60000)
    semantic_timeout_ms: int = Field(default=120000, ge=1000, le=600000)
    mask_sensitive_values: bool = True


class LoggingSettings(BaseModel):
    """
    Logging configuration.
    
    Attributes:
        level: Log level
        format: Log format string
        file: Log file path (None for console only)
        json_format: Use JSON format for logs
    """
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None
    json_format: bool = False


class Settings(BaseSettings):
    """
    Root settings container - single source of truth for all configuration.
    
    Settings are loaded in this priority order (highest to lowest):
    1. Explicit values passed to constructor
    2. Environment variables (prefixed with INTENT_REPLAY__)
    3. Config file (YAML)
    4. Default values
    
    Example:
        >>> settings = Settings()  # Load from env vars
        >>> settings = Settings(driver=DriverSettings(locate_timeout_ms=1000))
    """
    
    model_config = SettingsConfigDict(
        env_prefix="INTENT_REPLAY__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )
    
    driver: DriverSettings = Field(default_factory=DriverSettings)
    execution: ExecutionSettings = Field(default_factory=ExecutionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    
    def merge_with(self, overrides: dict) -> "Settings":
        """
        Create a new Settings instance with overrides applied.
        
        Args:
            overrides: Dictionary of values to override
            
        Returns:
            New Settings instance with overrides applied
        """
        current = self.model_dump()
        
        def deep_merge(base: dict, updates: dict) -> dict:
            for key, value in updates.items():
                if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                    deep_merge(base[key], value)
                else:
                    base[key] = value
            return base
        
        merged = deep_merge(current, overrides)
        return Settings(**merged)
