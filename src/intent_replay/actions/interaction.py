"""
Interaction Actions - primitives acting on a resolved element.
"""

import logging
from typing import Optional, TYPE_CHECKING

from intent_replay.interfaces.action import (
    BaseAction,
    ActionResult,
    ActionParams,
)
from intent_replay.outcome import ErrorKind, StepError
from intent_replay.spec.enums import ActionKind
from intent_replay.utils.logging import mask_value

if TYPE_CHECKING:
    from intent_replay.interfaces.driver import IBrowserDriver

logger = logging.getLogger(__name__)


class ClickAction(BaseAction):
    """Click on an element."""
    
    @property
    def action(self) -> ActionKind:
        return ActionKind.CLICK
    
    async def _execute(
        self,
        driver: "IBrowserDriver",
        params: ActionParams,
        timeout_ms: int,
    ) -> ActionResult:
        await driver.click(params.element)
        logger.info(f"Clicked element: {params.locator}")
        return ActionResult.success_result(action=self.action, locator=params.locator)


class FillAction(BaseAction):
    """Fill an input element with text."""
    
    def __init__(self, mask_sensitive: bool = True):
        self._mask = mask_sensitive
    
    @property
    def action(self) -> ActionKind:
        return ActionKind.FILL
    
    def validate_params(self, params: ActionParams) -> Optional[StepError]:
        invalid = super().validate_params(params)
        if invalid is None and params.value is None:
            return StepError(ErrorKind.DRIVER_ERROR, "fill requires a value")
        return invalid
    
    async def _execute(
        self,
        driver: "IBrowserDriver",
        params: ActionParams,
        timeout_ms: int,
    ) -> ActionResult:
        value = params.value or ""
        await driver.fill(params.element, value)
        shown = mask_value(value, params.locator) if self._mask else value
        logger.info(f"Filled {params.locator} with: {shown}")
        return ActionResult.success_result(action=self.action, locator=params.locator)


class SelectOptionAction(BaseAction):
    """Select an option in a dropdown."""
    
    @property
    def action(self) -> ActionKind:
        return ActionKind.SELECT_OPTION
    
    def validate_params(self, params: ActionParams) -> Optional[StepError]:
        invalid = super().validate_params(params)
        if invalid is None and params.value is None:
            return StepError(ErrorKind.DRIVER_ERROR, "selectOption requires a value")
        return invalid
    
    async def _execute(
        self,
        driver: "IBrowserDriver",
        params: ActionParams,
        timeout_ms: int,
    ) -> ActionResult:
        value = params.value or ""
        await driver.select_option(params.element, value)
        logger.info(f"Selected option {value} in {params.locator}")
        return ActionResult.success_result(
            action=self.action,
            data={"selected": value},
            locator=params.locator,
        )
