"""
Intent Spec exceptions.
"""

from typing import Iterable

from intent_replay.exceptions.base import IntentReplayError


class IntentSpecError(IntentReplayError):
    """
    The Intent Spec document is malformed.
    
    Raised at load time, before anything touches the browser.
    """
    
    def __init__(self, message: str, source: str | None = None):
        super().__init__(message, {"source": source} if source else None)
        self.source = source


class TemplatingError(IntentSpecError):
    """
    A ``{{NAME}}`` placeholder has no value.
    
    Fatal for the whole run: raised before the first step executes.
    """
    
    def __init__(self, message: str, missing: Iterable[str]):
        self.missing = sorted(set(missing))
        super().__init__(f"{message}: {', '.join(self.missing)}")
        self.details = {"missing": self.missing}
