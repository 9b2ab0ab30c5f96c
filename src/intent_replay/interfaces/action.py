"""
Action Interface - Base classes for the engine's action primitives.

Each primitive wraps exactly one browser-driver call with a bounded wait and
reports failures in a uniform shape: an ``ActionResult`` whose ``error`` is a
``StepError`` of kind ``timeout``, ``locator-not-found`` or ``driver-error``.
Primitives never raise.

Example:
    >>> from intent_replay.actions import ClickAction
    >>> action = ClickAction()
    >>> result = await action.execute(driver, ActionParams(element=el), timeout_ms=5000)
"""

from abc import ABC, abstractmethod
import asyncio
from dataclasses import dataclass
from typing import Any, Optional, TYPE_CHECKING
import time

from intent_replay.outcome import ErrorKind, StepError
from intent_replay.exceptions import (
    ActionTimeoutError,
    BrowserTimeoutError,
    ElementNotFoundError,
)
from intent_replay.spec.enums import ActionKind

if TYPE_CHECKING:
    from intent_replay.interfaces.driver import IBrowserDriver


def classify_exception(error: BaseException) -> ErrorKind:
    """
    Map an exception raised below the engine to the error taxonomy.

    Driver libraries use their own timeout classes (Playwright's is also
    named ``TimeoutError``), so the class name is checked as well.
    """
    if isinstance(error, (BrowserTimeoutError, ActionTimeoutError, asyncio.TimeoutError)):
        return ErrorKind.TIMEOUT
    if type(error).__name__ == "TimeoutError":
        return ErrorKind.TIMEOUT
    if isinstance(error, ElementNotFoundError):
        return ErrorKind.LOCATOR_NOT_FOUND
    return ErrorKind.DRIVER_ERROR


@dataclass
class ActionResult:
    """
    Result of an action primitive.

    Attributes:
        success: Whether the action succeeded
        action: The primitive that ran
        error: Uniform error shape when it failed
        locator: Locator that resolved the target element, if any
        data: Optional data returned by the action
        duration_ms: Time taken in milliseconds
    """
    success: bool
    action: ActionKind
    error: Optional[StepError] = None
    locator: Optional[str] = None
    data: Optional[Any] = None
    duration_ms: float = 0.0

    @classmethod
    def success_result(
        cls,
        action: ActionKind,
        data: Optional[Any] = None,
        locator: Optional[str] = None,
    ) -> "ActionResult":
        """Create a successful action result."""
        return cls(success=True, action=action, data=data, locator=locator)

    @classmethod
    def failure_result(
        cls,
        action: ActionKind,
        kind: ErrorKind,
        message: str,
        locator: Optional[str] = None,
        duration_ms: float = 0.0,
    ) -> "ActionResult":
        """Create a failed action result."""
        return cls(
            success=False,
            action=action,
            error=StepError(kind, message),
            locator=locator,
            duration_ms=duration_ms,
        )


@dataclass
class ActionParams:
    """
    Parameters for a primitive.

    Attributes:
        element: Resolved element (element actions only)
        locator: Locator that resolved ``element``, for reporting
        value: URL, input text, option value, or wait condition
    """
    element: Optional[Any] = None
    locator: Optional[str] = None
    value: Optional[str] = None


class BaseAction(ABC):
    """
    Template for primitives: validation, timing, timeout and error mapping.

    Subclasses override ``action`` and ``_execute``.
    """

    @property
    @abstractmethod
    def action(self) -> ActionKind:
        """The primitive this class implements."""
        ...

    @property
    def requires_element(self) -> bool:
        return self.action.needs_element

    def validate_params(self, params: ActionParams) -> Optional[StepError]:
        """Return an error when the params cannot be executed."""
        if self.requires_element and params.element is None:
            # Element primitives never fabricate a selector
            return StepError(ErrorKind.LOCATOR_NOT_FOUND, f"{self.action.value} requires a resolved element")
        return None

    def wraps_timeout(self) -> bool:
        """Whether ``execute`` bounds ``_execute`` with the timeout itself."""
        return True

    async def execute(
        self,
        driver: "IBrowserDriver",
        params: ActionParams,
        timeout_ms: int,
    ) -> ActionResult:
        """
        Execute the primitive with timing and error handling.

        Subclasses should override _execute instead of this method.
        """
        invalid = self.validate_params(params)
        if invalid is not None:
            return ActionResult(success=False, action=self.action, error=invalid, locator=params.locator)

        start_time = time.perf_counter()
        try:
            if self.wraps_timeout():
                result = await asyncio.wait_for(
                    self._execute(driver, params, timeout_ms),
                    timeout=timeout_ms / 1000,
                )
            else:
                result = await self._execute(driver, params, timeout_ms)
            result.duration_ms = (time.perf_counter() - start_time) * 1000
            return result
        except asyncio.TimeoutError:
            return ActionResult.failure_result(
                action=self.action,
                kind=ErrorKind.TIMEOUT,
                message=f"{self.action.value} timed out after {timeout_ms}ms",
                locator=params.locator,
                duration_ms=(time.perf_counter() - start_time) * 1000,
            )
        except Exception as e:
            return ActionResult.failure_result(
                action=self.action,
                kind=classify_exception(e),
                message=str(e) or type(e).__name__,
                locator=params.locator,
                duration_ms=(time.perf_counter() - start_time) * 1000,
            )

    @abstractmethod
    async def _execute(
        self,
        driver: "IBrowserDriver",
        params: ActionParams,
        timeout_ms: int,
    ) -> ActionResult:
        """
        Execute the primitive implementation.

        Subclasses must implement this method.
        """
        ...
