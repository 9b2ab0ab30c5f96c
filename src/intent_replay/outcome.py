"""
Execution outcomes - what happened to each step of a run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from intent_replay.spec.enums import ExecutionPath


class ErrorKind(str, Enum):
    """Error taxonomy surfaced in outcomes."""
    TEMPLATING = "templating-error"
    LOCATOR_NOT_FOUND = "locator-not-found"
    TIMEOUT = "timeout"
    DRIVER_ERROR = "driver-error"
    VALIDATION_FAILED = "validation-failed"
    SEMANTIC_FAILED = "semantic-failed"
    CANCELLED = "cancelled"


class StepState(Enum):
    """States of the step executor."""
    PENDING = "pending"
    SKIPPED = "skipped"
    PRIMARY_ATTEMPT = "primary_attempt"
    FALLBACK_ATTEMPT = "fallback_attempt"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class StepError:
    """Uniform error shape: a kind from the taxonomy and a message."""
    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


CANCELLED_STEP = "<cancelled>"
START_STEP = "<start>"


@dataclass(frozen=True)
class ExecutionOutcome:
    """
    Result of one step invocation. Immutable once returned.

    Attributes:
        step_name: The step's label
        success: Whether the step counts as done (skipped steps succeed)
        path_used: Path of the last attempt (NONE when nothing executed)
        fallback_occurred: A fallback attempt was made, whatever its result
        attempts: Primary plus fallback attempts
        error: Final error, if the step failed
        skipped: Skip reason, if a skip condition matched
        non_fatal: Failed, but ``skipOnError`` let the run continue
        duration_ms: Wall time spent on the step
    """
    step_name: str
    success: bool
    path_used: ExecutionPath = ExecutionPath.NONE
    fallback_occurred: bool = False
    attempts: int = 0
    error: Optional[StepError] = None
    skipped: Optional[str] = None
    non_fatal: bool = False
    duration_ms: float = 0.0

    @property
    def state(self) -> StepState:
        if self.skipped is not None:
            return StepState.SKIPPED
        return StepState.SUCCESS if self.success else StepState.FAILED

    @property
    def is_cancellation(self) -> bool:
        return self.error is not None and self.error.kind is ErrorKind.CANCELLED

    @classmethod
    def cancelled(cls) -> "ExecutionOutcome":
        """The pseudo-outcome appended when a run is cancelled."""
        return cls(
            step_name=CANCELLED_STEP,
            success=False,
            error=StepError(ErrorKind.CANCELLED, "Run cancelled"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """camelCase dict for the report layer."""
        data: Dict[str, Any] = {
            "stepName": self.step_name,
            "success": self.success,
            "pathUsed": self.path_used.value,
            "fallbackOccurred": self.fallback_occurred,
            "attempts": self.attempts,
            "durationMs": round(self.duration_ms, 1),
        }
        if self.error is not None:
            data["error"] = {"kind": self.error.kind.value, "message": self.error.message}
        if self.skipped is not None:
            data["skipped"] = self.skipped
        if self.non_fatal:
            data["nonFatal"] = True
        return data


@dataclass
class ExecutionStats:
    """Aggregate counters over a run's outcomes."""
    total_steps: int = 0
    snippet_success: int = 0
    snippet_failure: int = 0
    ai_success: int = 0
    ai_failure: int = 0
    skipped_steps: int = 0
    fallbacks: int = 0

    @classmethod
    def from_outcomes(cls, outcomes: List[ExecutionOutcome]) -> "ExecutionStats":
        stats = cls()
        for outcome in outcomes:
            if outcome.is_cancellation or outcome.step_name == START_STEP:
                continue
            stats.total_steps += 1
            if outcome.skipped is not None:
                stats.skipped_steps += 1
                continue
            if outcome.fallback_occurred:
                stats.fallbacks += 1
            if outcome.path_used is ExecutionPath.SNIPPET:
                if outcome.success:
                    stats.snippet_success += 1
                else:
                    stats.snippet_failure += 1
            elif outcome.path_used is ExecutionPath.AI:
                if outcome.success:
                    stats.ai_success += 1
                else:
                    stats.ai_failure += 1
        return stats

    @property
    def executed(self) -> int:
        return self.snippet_success + self.snippet_failure + self.ai_success + self.ai_failure

    @property
    def snippet_success_rate(self) -> float:
        return self.snippet_success / self.executed if self.executed else 0.0

    @property
    def ai_success_rate(self) -> float:
        return self.ai_success / self.executed if self.executed else 0.0

    @property
    def skip_rate(self) -> float:
        return self.skipped_steps / self.total_steps if self.total_steps else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalSteps": self.total_steps,
            "snippetSuccess": self.snippet_success,
            "snippetFailure": self.snippet_failure,
            "aiSuccess": self.ai_success,
            "aiFailure": self.ai_failure,
            "skippedSteps": self.skipped_steps,
            "fallbacks": self.fallbacks,
            "snippetSuccessRate": self.snippet_success_rate,
            "aiSuccessRate": self.ai_success_rate,
            "skipRate": self.skip_rate,
        }


@dataclass
class RunResult:
    """
    Everything a run produced, in step order.

    Attributes:
        spec_name: Name of the replayed Intent Spec
        outcomes: Per-step outcomes, ending with a CANCELLED pseudo-outcome
            when the run was cancelled
    """
    spec_name: str
    outcomes: List[ExecutionOutcome] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True when every outcome succeeded or was a non-fatal failure."""
        return all(o.success or o.non_fatal for o in self.outcomes)

    @property
    def cancelled(self) -> bool:
        return bool(self.outcomes) and self.outcomes[-1].is_cancellation

    @property
    def failed_step(self) -> Optional[ExecutionOutcome]:
        """The step that halted the run, if any."""
        for outcome in self.outcomes:
            if not outcome.success and not outcome.non_fatal and not outcome.is_cancellation:
                return outcome
        return None

    @property
    def stats(self) -> ExecutionStats:
        return ExecutionStats.from_outcomes(self.outcomes)

    def __iter__(self):
        return iter(self.outcomes)

    def __len__(self) -> int:
        return len(self.outcomes)

    def __getitem__(self, index: int) -> ExecutionOutcome:
        return self.outcomes[index]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.spec_name,
            "success": self.success,
            "cancelled": self.cancelled,
            "outcomes": [o.to_dict() for o in self.outcomes],
            "stats": self.stats.to_dict(),
        }
