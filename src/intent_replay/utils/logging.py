"""
Logging utilities for Intent Replay.
"""

import logging
import re
from typing import Optional, TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from intent_replay.config import Settings

# Field names whose typed-in values never reach a log line
_SENSITIVE_PATTERN = re.compile(r"pass(word)?|pwd|secret|token|api[_-]?key|otp|pin\b", re.IGNORECASE)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    fmt: Optional[str] = None,
) -> None:
    """
    Configure logging for the application.
    
    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        json_format: Use JSON format for the file log
        fmt: Format string for the plain file log
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    
    # Console handler with Rich
    console = Console(stderr=True)
    console_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)
    
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        
        if json_format:
            formatter = logging.Formatter(
                '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
            )
        else:
            formatter = logging.Formatter(
                fmt or "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
        
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)



def setup_logging_from_settings(settings: "Settings") -> None:
    """Configure logging from the ``logging`` section of ``settings``."""
    config = settings.logging
    setup_logging(
        level=config.level,
        log_file=config.file,
        json_format=config.json_format,
        fmt=config.format,
    )


def is_sensitive(*labels: Optional[str]) -> bool:
    """True when any label names a credential-like field."""
    return any(_SENSITIVE_PATTERN.search(label) for label in labels if label)


def mask_value(value: str, *labels: Optional[str]) -> str:
    """
    Hide ``value`` when it is typed into a credential-like field.

    Example:
        >>> mask_value("hunter2", "#password")
        '****'
        >>> mask_value("a@b.com", "#email")
        'a@b.com'
    """
    if is_sensitive(*labels):
        return "****"
    return value
