"""
Action Primitives - the deterministic ("snippet") execution path.

Dispatch is on ``ActionKind``, resolved when the spec was loaded; element
actions resolve their target through the ``LocatorResolver`` first and fail
with ``locator-not-found`` when nothing visible matches.
"""

import logging
from typing import Dict, Optional, Sequence, TYPE_CHECKING

from intent_replay.actions import (
    ClickAction,
    FillAction,
    NavigateAction,
    SelectOptionAction,
    WaitAction,
)
from intent_replay.engine.locator_resolver import LocatorResolver, ResolutionHint
from intent_replay.interfaces.action import ActionParams, ActionResult, BaseAction
from intent_replay.outcome import ErrorKind
from intent_replay.spec.enums import ActionKind

if TYPE_CHECKING:
    from intent_replay.config import Settings
    from intent_replay.interfaces.driver import IBrowserDriver

logger = logging.getLogger(__name__)


class ActionPrimitives:
    """
    navigate / click / fill / selectOption / wait against one driver.

    Usage:
        primitives = ActionPrimitives(driver, resolver, settings)
        result = await primitives.perform(ActionKind.FILL, ["#email"], "a@b.com")
    """

    def __init__(
        self,
        driver: "IBrowserDriver",
        resolver: LocatorResolver,
        settings: "Settings",
    ):
        self._driver = driver
        self._resolver = resolver
        self._timeout_ms = settings.driver.timeout_ms
        self._navigation_timeout_ms = settings.driver.navigation_timeout_ms

        execution = settings.execution
        self._actions: Dict[ActionKind, BaseAction] = {
            ActionKind.NAVIGATE: NavigateAction(
                attempts=execution.navigate_retries,
                backoff_ms=execution.navigate_backoff_ms,
            ),
            ActionKind.CLICK: ClickAction(),
            ActionKind.FILL: FillAction(mask_sensitive=execution.mask_sensitive_values),
            ActionKind.SELECT_OPTION: SelectOptionAction(),
            ActionKind.WAIT: WaitAction(default_wait_ms=execution.default_wait_ms),
        }

    async def navigate(self, url: str) -> ActionResult:
        return await self._actions[ActionKind.NAVIGATE].execute(
            self._driver, ActionParams(value=url), self._navigation_timeout_ms
        )

    async def wait(self, condition: Optional[str], timeout_ms: Optional[int] = None) -> ActionResult:
        return await self._actions[ActionKind.WAIT].execute(
            self._driver, ActionParams(value=condition), timeout_ms or self._timeout_ms
        )

    async def perform(
        self,
        action: ActionKind,
        locators: Sequence[str],
        value: Optional[str] = None,
        hint: Optional[ResolutionHint] = None,
        timeout_ms: Optional[int] = None,
    ) -> ActionResult:
        """
        Run one primitive, resolving its element first when it needs one.

        Args:
            action: Primitive to run
            locators: Candidate locators (element actions only)
            value: Substituted URL, text, option value or wait condition
            hint: Text hint for last-resort resolution
            timeout_ms: Bound for the driver call (defaults to settings)

        Returns:
            ActionResult; never raises
        """
        if action is ActionKind.NAVIGATE:
            return await self.navigate(value or "")
        if action is ActionKind.WAIT:
            return await self.wait(value, timeout_ms)

        found = await self._resolver.resolve(locators, hint)
        if found is None:
            tried = list(locators)
            if hint and hint.text:
                tried.append(f"text:{hint.text}")
            return ActionResult.failure_result(
                action=action,
                kind=ErrorKind.LOCATOR_NOT_FOUND,
                message=f"No visible element for {tried}" if tried else "Step has no locators",
            )

        params = ActionParams(element=found.element, locator=found.locator, value=value)
        return await self._actions[action].execute(self._driver, params, timeout_ms or self._timeout_ms)
