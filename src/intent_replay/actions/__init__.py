"""
Actions module - Action primitive implementations.
"""

from intent_replay.actions.navigation import (
    NavigateAction,
    WaitAction,
)
from intent_replay.actions.interaction import (
    ClickAction,
    FillAction,
    SelectOptionAction,
)

__all__ = [
    # Navigation
    "NavigateAction",
    "WaitAction",
    # Interaction
    "ClickAction",
    "FillAction",
    "SelectOptionAction",
]
