"""
Exceptions module - Custom exception hierarchy.

This module defines all custom exceptions used throughout Intent Replay,
providing clear error types for different failure scenarios.
"""

from intent_replay.exceptions.base import (
    IntentReplayError,
    ConfigurationError,
)
from intent_replay.exceptions.spec import (
    IntentSpecError,
    TemplatingError,
)
from intent_replay.exceptions.browser import (
    BrowserError,
    BrowserLaunchError,
    NavigationError,
    ElementNotFoundError,
    TimeoutError as BrowserTimeoutError,
)
from intent_replay.exceptions.action import (
    ActionError,
    ActionTimeoutError,
)

__all__ = [
    # Base exceptions
    "IntentReplayError",
    "ConfigurationError",
    # Intent Spec exceptions
    "IntentSpecError",
    "TemplatingError",
    # Browser exceptions
    "BrowserError",
    "BrowserLaunchError",
    "NavigationError",
    "ElementNotFoundError",
    "BrowserTimeoutError",
    # Action exceptions
    "ActionError",
    "ActionTimeoutError",
]
