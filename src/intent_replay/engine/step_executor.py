"""
Step Executor - runs one Intent Spec step through the hybrid state machine.

    PENDING -> SKIPPED                        (a skip condition matched)
    PENDING -> FAILED                         (a required pre-flight check failed)
    PENDING -> PRIMARY_ATTEMPT                (up to ``retries`` attempts)
    PRIMARY_ATTEMPT -> SUCCESS                (action and validation passed)
    PRIMARY_ATTEMPT -> FALLBACK_ATTEMPT       (budget spent, fallback != none)
    FALLBACK_ATTEMPT -> SUCCESS | FAILED      (exactly one attempt)

Every attempt is followed by the step's validation, so an action that
"succeeded" on the wrong element still counts as a failed attempt. Nothing
below this class raises: driver and executor failures are folded into the
returned ``ExecutionOutcome``.
"""

import asyncio
import logging
import time
from typing import Callable, Optional, TYPE_CHECKING

from intent_replay.engine.conditions import ConditionEvaluator
from intent_replay.engine.locator_resolver import LocatorResolver, ResolutionHint
from intent_replay.engine.primitives import ActionPrimitives
from intent_replay.interfaces.action import classify_exception
from intent_replay.outcome import (
    START_STEP,
    ErrorKind,
    ExecutionOutcome,
    StepError,
    StepState,
)
from intent_replay.spec.enums import ActionKind, ExecutionPath
from intent_replay.utils.logging import mask_value
from intent_replay.utils.retry import with_timeout

if TYPE_CHECKING:
    from intent_replay.config import Settings
    from intent_replay.interfaces.driver import IBrowserDriver
    from intent_replay.interfaces.semantic import IScreenshotComparator, ISemanticExecutor
    from intent_replay.spec.models import Step

logger = logging.getLogger(__name__)

Substitute = Callable[[Optional[str]], str]


def _identity(text: Optional[str]) -> str:
    return text or ""


class StepExecutor:
    """
    Execute single steps against a driver and an optional semantic executor.

    Usage:
        executor = StepExecutor(driver, semantic, settings)
        outcome = await executor.execute(step, substitute)
        if not outcome.success:
            print(outcome.error)
    """

    def __init__(
        self,
        driver: "IBrowserDriver",
        semantic_executor: Optional["ISemanticExecutor"],
        settings: "Settings",
        comparator: Optional["IScreenshotComparator"] = None,
    ):
        self._driver = driver
        self._semantic = semantic_executor
        self._settings = settings
        self._resolver = LocatorResolver(driver, settings.driver.locate_timeout_ms)
        self._primitives = ActionPrimitives(driver, self._resolver, settings)
        self._conditions = ConditionEvaluator(
            driver,
            self._resolver,
            comparator=comparator,
            poll_interval_ms=settings.execution.preflight_poll_interval_ms,
            timeout_ms=settings.driver.locate_timeout_ms,
        )
        self._state = StepState.PENDING

    @property
    def state(self) -> StepState:
        """State of the step currently (or last) executed."""
        return self._state

    async def open_start_url(self, url: str) -> ExecutionOutcome:
        """Navigate to a workflow's start URL, reported as a pseudo-step."""
        start = time.perf_counter()
        result = await self._primitives.navigate(url)
        return ExecutionOutcome(
            step_name=START_STEP,
            success=result.success,
            path_used=ExecutionPath.SNIPPET,
            attempts=1,
            error=result.error,
            duration_ms=(time.perf_counter() - start) * 1000,
        )

    async def execute(
        self,
        step: "Step",
        substitute: Optional[Substitute] = None,
        timeout_ms: Optional[int] = None,
    ) -> ExecutionOutcome:
        """
        Run one step to completion.

        Args:
            step: The step to execute
            substitute: Applies the run's variables to templated fields
            timeout_ms: Bound for each element primitive (defaults to settings)

        Returns:
            ExecutionOutcome; never raises
        """
        substitute = substitute or _identity
        start = time.perf_counter()
        self._state = StepState.PENDING

        def finish(**fields) -> ExecutionOutcome:
            outcome = ExecutionOutcome(
                step_name=step.name,
                duration_ms=(time.perf_counter() - start) * 1000,
                non_fatal=not fields["success"] and step.error_handling.skip_on_error,
                **fields,
            )
            self._state = outcome.state
            return outcome

        reason = await self._conditions.skip_reason(step.skip_conditions, substitute)
        if reason is not None:
            logger.info(f"Skipping step '{step.name}': {reason}")
            return finish(success=True, skipped=reason)

        preflight_error = await self._conditions.preflight(step.pre_flight_checks)
        if preflight_error is not None:
            logger.error(f"Step '{step.name}' failed pre-flight: {preflight_error.message}")
            return finish(success=False, error=preflight_error)

        primary = step.prefer
        budget = step.error_handling.attempt_budget
        delay_ms = step.error_handling.retry_delay_ms or 0
        attempts = 0
        error: Optional[StepError] = None

        self._state = StepState.PRIMARY_ATTEMPT
        for attempt in range(1, budget + 1):
            attempts += 1
            error = await self._attempt(step, primary, substitute, timeout_ms)
            if error is None:
                logger.info(f"Step '{step.name}' succeeded via {primary.value} (attempt {attempt})")
                return finish(success=True, path_used=primary, attempts=attempts)

            logger.warning(
                f"Step '{step.name}' {primary.value} attempt {attempt}/{budget} failed: {error}"
            )
            if attempt < budget and delay_ms:
                await asyncio.sleep(delay_ms / 1000)

        if step.fallback is ExecutionPath.NONE:
            return finish(success=False, path_used=primary, attempts=attempts, error=error)

        fallback = primary.other()
        self._state = StepState.FALLBACK_ATTEMPT
        logger.info(f"Step '{step.name}' falling back to {fallback.value}")
        attempts += 1
        error = await self._attempt(step, fallback, substitute, timeout_ms)
        if error is None:
            logger.info(f"Step '{step.name}' succeeded via fallback {fallback.value}")
        else:
            logger.error(f"Step '{step.name}' failed after fallback: {error}")
        return finish(
            success=error is None,
            path_used=fallback,
            fallback_occurred=True,
            attempts=attempts,
            error=error,
        )

    async def _attempt(
        self,
        step: "Step",
        path: ExecutionPath,
        substitute: Substitute,
        timeout_ms: Optional[int],
    ) -> Optional[StepError]:
        """One attempt on one path, followed by validation."""
        try:
            if path is ExecutionPath.SNIPPET:
                error = await self._run_snippet(step, substitute, timeout_ms)
            else:
                error = await self._run_semantic(step, substitute)
            if error is not None:
                return error

            validation_error = await self._conditions.validate(step.validation, substitute)
        except Exception as e:
            return StepError(classify_exception(e), str(e) or type(e).__name__)

        if validation_error is None:
            return None
        if step.validation is not None and step.validation.continue_on_failure:
            logger.warning(f"Step '{step.name}' validation failed, continuing: {validation_error.message}")
            return None
        return validation_error

    async def _run_snippet(
        self,
        step: "Step",
        substitute: Substitute,
        timeout_ms: Optional[int],
    ) -> Optional[StepError]:
        value = substitute(step.value) if step.value is not None else None
        result = await self._primitives.perform(
            step.action,
            step.snippet_locators,
            value,
            hint=self._hint(step, value),
            timeout_ms=timeout_ms,
        )
        return result.error

    async def _run_semantic(self, step: "Step", substitute: Substitute) -> Optional[StepError]:
        if self._semantic is None:
            return StepError(ErrorKind.SEMANTIC_FAILED, "No semantic executor configured")

        instruction = substitute(step.instruction)
        shown = instruction
        if step.value and self._settings.execution.mask_sensitive_values:
            value = substitute(step.value)
            if value:
                shown = instruction.replace(value, mask_value(value, step.name, *step.locators))
        logger.debug(f"Semantic instruction: {shown}")

        try:
            result = await with_timeout(
                self._semantic.execute(instruction),
                self._settings.execution.semantic_timeout_ms,
                operation="semantic instruction",
            )
        except Exception as e:
            kind = classify_exception(e)
            if kind is ErrorKind.DRIVER_ERROR:
                kind = ErrorKind.SEMANTIC_FAILED
            return StepError(kind, str(e) or type(e).__name__)

        if result.success:
            return None
        return StepError(ErrorKind.SEMANTIC_FAILED, result.error or "Semantic executor reported failure")

    @staticmethod
    def _hint(step: "Step", value: Optional[str]) -> Optional[ResolutionHint]:
        """Text hint for last-resort resolution: the label a user would read."""
        if step.action is ActionKind.CLICK:
            return ResolutionHint(text=value or step.name or None, role=None)
        if step.action.needs_element and step.name:
            return ResolutionHint(text=step.name)
        return None
