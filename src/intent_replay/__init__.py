"""
Intent Replay - hybrid replay of recorded browser workflows.

An Intent Spec describes a workflow as steps that can each run two ways:
deterministically (locators plus an action primitive) or semantically (a
natural-language instruction handed to an LLM-driven browser agent). Each
step tries its preferred path, retries it, and falls back to the other.

Example:
    >>> from intent_replay import WorkflowRunner
    >>> from intent_replay.browsers import PlaywrightDriver
    >>> runner = WorkflowRunner(PlaywrightDriver(page), semantic_executor=agent)
    >>> result = await runner.run("login.json", {"EMAIL": "a@b.com"})
"""

__version__ = "0.1.0"

# Public API exports
from intent_replay.config.settings import Settings
from intent_replay.engine import StepExecutor, WorkflowRunner
from intent_replay.outcome import ErrorKind, ExecutionOutcome, RunResult
from intent_replay.spec import IntentSpec, Step, load_intent_spec
from intent_replay.templating import substitute

__all__ = [
    "WorkflowRunner",
    "StepExecutor",
    "IntentSpec",
    "Step",
    "load_intent_spec",
    "ExecutionOutcome",
    "RunResult",
    "ErrorKind",
    "Settings",
    "substitute",
    "__version__",
]
