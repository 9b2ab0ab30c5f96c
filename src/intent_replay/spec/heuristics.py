"""
Heuristics applied while loading an Intent Spec.

Analyzer output is not always complete: older documents omit ``action`` or
``prefer``, and many steps carry no hand-written instruction for the
semantic path. These rules fill the gaps once, at load time.
"""

import re
from typing import List, Optional, Pattern, Tuple

from intent_replay.spec.enums import ActionKind, ExecutionPath

# Steps touching these get the semantic path first: secrets, dynamic
# widgets and anything whose target depends on page context.
SEMANTIC_FIRST_PATTERNS: List[Pattern[str]] = [
    re.compile(r"password|pwd|secret|token|api[_-]?key", re.I),
    re.compile(r"login|signin|auth|credential", re.I),
    re.compile(r"search|filter|query|find", re.I),
    re.compile(r"suggestion|autocomplete|typeahead", re.I),
    re.compile(r"date[_-]?picker|calendar|time[_-]?picker", re.I),
    re.compile(r"drag|drop|resize|draw", re.I),
    re.compile(r"upload|file[_-]?input", re.I),
    re.compile(r"dynamic|contextual|conditional", re.I),
    re.compile(r"recommendation|personalized", re.I),
    re.compile(r"wysiwyg|editor|markdown|rich[_-]?text", re.I),
    re.compile(r"captcha|recaptcha|verification|challenge", re.I),
]

# Only the security patterns apply to step values
_VALUE_PATTERNS = SEMANTIC_FIRST_PATTERNS[:2]

# (regex, action) - first match wins
ACTION_PATTERNS: List[Tuple[Pattern[str], ActionKind]] = [
    (re.compile(r"\b(?:navigate|go to|open|visit)\b", re.I), ActionKind.NAVIGATE),
    (re.compile(r"\b(?:click|tap|press)\b", re.I), ActionKind.CLICK),
    (re.compile(r"\b(?:enter|type|fill|input)\b", re.I), ActionKind.FILL),
    (re.compile(r"\b(?:select|choose)\b", re.I), ActionKind.SELECT_OPTION),
    (re.compile(r"\bwait\b", re.I), ActionKind.WAIT),
]


def suggest_preference(
    instruction: Optional[str],
    locators: List[str],
    value: Optional[str] = None,
) -> ExecutionPath:
    """
    Pick the default execution path for a step that does not name one.
    
    Example:
        >>> suggest_preference("Enter the password", ["#password"])
        <ExecutionPath.AI: 'ai'>
        >>> suggest_preference("Click Save", ["#save"])
        <ExecutionPath.SNIPPET: 'snippet'>
    """
    if instruction and any(p.search(instruction) for p in SEMANTIC_FIRST_PATTERNS):
        return ExecutionPath.AI
    
    joined = " ".join(locators)
    if joined and any(p.search(joined) for p in SEMANTIC_FIRST_PATTERNS):
        return ExecutionPath.AI
    
    if value and any(p.search(value) for p in _VALUE_PATTERNS):
        return ExecutionPath.AI
    
    return ExecutionPath.SNIPPET


def infer_action(instruction: Optional[str]) -> Optional[ActionKind]:
    """Guess the action of a step from its instruction, or None."""
    if not instruction:
        return None
    for pattern, action in ACTION_PATTERNS:
        if pattern.search(instruction):
            return action
    return None


def describe_step(action: ActionKind, name: str, value: Optional[str]) -> str:
    """
    Build a semantic-path instruction for a step that has none.
    
    Placeholders in ``value`` are kept so substitution happens at run time.
    """
    target = name or "the target element"
    if action is ActionKind.NAVIGATE:
        return f"Navigate to {value}"
    if action is ActionKind.CLICK:
        return f"Click {target}"
    if action is ActionKind.FILL:
        return f"Fill {target} with {value}"
    if action is ActionKind.SELECT_OPTION:
        return f"Select {value} in {target}"
    return f"Wait for {value}" if value else "Wait for the page to settle"
