"""
Navigation Actions - page navigation and waiting.
"""

import asyncio
import logging
from typing import Optional, TYPE_CHECKING

from intent_replay.interfaces.action import (
    BaseAction,
    ActionResult,
    ActionParams,
    classify_exception,
)
from intent_replay.exceptions import NavigationError
from intent_replay.interfaces.driver import WaitCondition, WaitKind
from intent_replay.outcome import ErrorKind, StepError
from intent_replay.spec.enums import ActionKind
from intent_replay.utils.retry import RetryConfig, retry_async, with_timeout

if TYPE_CHECKING:
    from intent_replay.interfaces.driver import IBrowserDriver

logger = logging.getLogger(__name__)


class NavigateAction(BaseAction):
    """
    Navigate to a URL, retrying transient failures with a fixed backoff.
    
    Each attempt is bounded by ``timeout_ms``; the whole primitive is bounded
    by the attempts and backoff together, so ``execute`` does not add an
    outer timeout.
    """
    
    def __init__(self, attempts: int = 3, backoff_ms: int = 2000):
        self._retry = RetryConfig.fixed(attempts, backoff_ms)
    
    @property
    def action(self) -> ActionKind:
        return ActionKind.NAVIGATE
    
    def wraps_timeout(self) -> bool:
        return False
    
    def validate_params(self, params: ActionParams) -> Optional[StepError]:
        if not params.value:
            return StepError(ErrorKind.DRIVER_ERROR, "navigate requires a URL")
        return None
    
    async def _execute(
        self,
        driver: "IBrowserDriver",
        params: ActionParams,
        timeout_ms: int,
    ) -> ActionResult:
        url = params.value or ""
        
        async def _attempt() -> None:
            await with_timeout(driver.navigate(url, timeout_ms), timeout_ms, operation=f"navigate {url}")
        
        try:
            await retry_async(_attempt, self._retry)
        except Exception as e:
            if classify_exception(e) is ErrorKind.TIMEOUT:
                raise
            raise NavigationError(
                f"Failed to navigate to {url}: {e}",
                url=url,
                attempts=self._retry.max_attempts,
            ) from e
        logger.info(f"Navigated to: {url}")
        return ActionResult.success_result(action=self.action, data={"url": url})


class WaitAction(BaseAction):
    """Wait for a selector, URL fragment, load state, or a fixed time."""
    
    def __init__(self, default_wait_ms: int = 2000):
        self._default_wait_ms = default_wait_ms
    
    @property
    def action(self) -> ActionKind:
        return ActionKind.WAIT
    
    def wraps_timeout(self) -> bool:
        return False
    
    async def _execute(
        self,
        driver: "IBrowserDriver",
        params: ActionParams,
        timeout_ms: int,
    ) -> ActionResult:
        condition = WaitCondition.parse(params.value, self._default_wait_ms)
        
        if condition.kind is WaitKind.TIMEOUT:
            await asyncio.sleep(int(condition.value or 0) / 1000)
        else:
            await with_timeout(
                driver.wait_for(condition, timeout_ms),
                timeout_ms,
                operation=f"wait for {condition.kind.value} {condition.value}",
            )
        
        return ActionResult.success_result(
            action=self.action,
            data={"kind": condition.kind.value, "value": condition.value},
        )
