"""
Browsers module - Browser driver implementations.
"""

from intent_replay.browsers.playwright_driver import PlaywrightDriver, PlaywrightSession

__all__ = [
    "PlaywrightDriver",
    "PlaywrightSession",
]
