"""
Engine Module - hybrid replay of Intent Specs.

- Locator resolution (first visible match, no scoring)
- Action primitives (the snippet path)
- Skip, pre-flight and validation conditions
- The per-step state machine and the workflow runner
"""

from intent_replay.engine.locator_resolver import (
    LocatorResolver,
    ResolutionHint,
    ResolvedElement,
    hint_locators,
)
from intent_replay.engine.primitives import ActionPrimitives
from intent_replay.engine.conditions import ConditionEvaluator, url_matches
from intent_replay.engine.step_executor import StepExecutor
from intent_replay.engine.runner import WorkflowRunner

__all__ = [
    # Resolution
    "LocatorResolver",
    "ResolutionHint",
    "ResolvedElement",
    "hint_locators",
    # Primitives
    "ActionPrimitives",
    # Conditions
    "ConditionEvaluator",
    "url_matches",
    # Execution
    "StepExecutor",
    "WorkflowRunner",
]
