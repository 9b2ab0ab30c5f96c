"""
Browser-related exceptions.
"""

from intent_replay.exceptions.base import IntentReplayError


class BrowserError(IntentReplayError):
    """Base exception for browser driver errors."""
    pass


class NavigationError(BrowserError):
    """
    Error during page navigation.
    
    Raised when navigation fails, such as:
    - Invalid URL
    - Network error
    - Navigation timeout
    """
    
    def __init__(self, message: str, url: str | None = None, attempts: int = 1):
        super().__init__(message, {"url": url, "attempts": attempts})
        self.url = url
        self.attempts = attempts


class ElementNotFoundError(BrowserError):
    """
    No visible element matched any of the candidate locators.
    """
    
    def __init__(self, message: str, locators: list[str] | None = None):
        super().__init__(message, {"locators": locators or []})
        self.locators = locators or []


class TimeoutError(BrowserError):
    """
    A driver operation exceeded its timeout.
    """
    
    def __init__(self, message: str, timeout_ms: int, operation: str | None = None):
        super().__init__(message, {"timeout_ms": timeout_ms, "operation": operation})
        self.timeout_ms = timeout_ms
        self.operation = operation


class BrowserLaunchError(BrowserError):
    """The browser could not be started."""
    pass
