"""
Intent Spec - the structured workflow plan replayed by the engine.
"""

from intent_replay.spec.enums import (
    ActionKind,
    ExecutionPath,
    SkipConditionKind,
    ValidationKind,
)
from intent_replay.spec.models import (
    IntentSpec,
    Step,
    PreFlightCheck,
    SkipCondition,
    Validation,
    ErrorHandling,
    Preferences,
)
from intent_replay.spec.loader import load_intent_spec

__all__ = [
    "ActionKind",
    "ExecutionPath",
    "SkipConditionKind",
    "ValidationKind",
    "IntentSpec",
    "Step",
    "PreFlightCheck",
    "SkipCondition",
    "Validation",
    "ErrorHandling",
    "Preferences",
    "load_intent_spec",
]
