"""
Utilities module - Common utility functions.
"""

from intent_replay.utils.logging import setup_logging, setup_logging_from_settings, mask_value
from intent_replay.utils.retry import retry_async, with_timeout, RetryConfig

__all__ = [
    "setup_logging",
    "setup_logging_from_settings",
    "mask_value",
    "retry_async",
    "with_timeout",
    "RetryConfig",
]
