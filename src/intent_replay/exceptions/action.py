"""
Action-related exceptions.
"""

from intent_replay.exceptions.base import IntentReplayError


class ActionError(IntentReplayError):
    """Base exception for action-related errors."""
    pass


class ActionTimeoutError(ActionError):
    """
    Action timed out.
    
    Raised when an action exceeds its timeout.
    """
    
    def __init__(self, message: str, action_type: str, timeout_ms: int):
        super().__init__(message, {"action_type": action_type, "timeout_ms": timeout_ms})
        self.action_type = action_type
        self.timeout_ms = timeout_ms
