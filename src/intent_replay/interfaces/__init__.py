"""
Interfaces module - Contracts between the engine and its collaborators.

The engine talks to the outside world through three seams:
- IBrowserDriver: the live page
- ISemanticExecutor: natural-language actions
- IScreenshotComparator: screenshot validation
"""

from intent_replay.interfaces.driver import (
    IBrowserDriver,
    WaitCondition,
    WaitKind,
)
from intent_replay.interfaces.semantic import (
    ISemanticExecutor,
    IScreenshotComparator,
    SemanticResult,
    CallableSemanticExecutor,
)
from intent_replay.interfaces.action import (
    BaseAction,
    ActionResult,
    ActionParams,
    classify_exception,
)

__all__ = [
    # Driver
    "IBrowserDriver",
    "WaitCondition",
    "WaitKind",
    # Semantic executor
    "ISemanticExecutor",
    "IScreenshotComparator",
    "SemanticResult",
    "CallableSemanticExecutor",
    # Actions
    "BaseAction",
    "ActionResult",
    "ActionParams",
    "classify_exception",
]
