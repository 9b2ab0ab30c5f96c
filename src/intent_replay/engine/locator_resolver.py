"""
Locator Resolver - first visible match across an ordered locator list.

Locators are listed from most specific (id) to least specific (text); the
resolver walks them in order and stops at the first one whose first match is
visible. There is no scoring across candidates: a best-match heuristic could
silently pick the wrong element.

When every explicit locator misses, two text strategies are tried as a last
resort if a hint is supplied: exact text, then a label containing the text.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, TYPE_CHECKING

from intent_replay.exceptions import BrowserTimeoutError
from intent_replay.utils.retry import with_timeout

if TYPE_CHECKING:
    from intent_replay.interfaces.driver import IBrowserDriver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionHint:
    """
    Text-based fallback information for resolution.

    Attributes:
        text: Visible text or label of the target
        role: ARIA role of the target (button, textbox, ...)
    """
    text: Optional[str] = None
    role: Optional[str] = None


@dataclass(frozen=True)
class ResolvedElement:
    """An element together with the locator that found it."""
    element: Any
    locator: str
    via_hint: bool = False


def _quote(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def hint_locators(hint: Optional[ResolutionHint]) -> List[str]:
    """
    Last-resort locators derived from a hint, in the order they are tried.

    Example:
        >>> hint_locators(ResolutionHint(text="Sign in"))
        ['text="Sign in"', 'label:has-text("Sign in")']
    """
    if hint is None or not hint.text or not hint.text.strip():
        return []
    text = _quote(hint.text.strip())
    if hint.role:
        exact = f'role={hint.role}[name="{text}"]'
    else:
        exact = f'text="{text}"'
    return [exact, f'label:has-text("{text}")']


class LocatorResolver:
    """
    Resolve an element from candidate locators.

    Usage:
        resolver = LocatorResolver(driver, locate_timeout_ms=5000)
        found = await resolver.resolve(["#email", "[name=email]"])
        if found:
            await driver.fill(found.element, "a@b.com")
    """

    def __init__(self, driver: "IBrowserDriver", locate_timeout_ms: int = 5000):
        self._driver = driver
        self._timeout_ms = locate_timeout_ms

    async def resolve(
        self,
        locators: Sequence[str],
        hint: Optional[ResolutionHint] = None,
    ) -> Optional[ResolvedElement]:
        """
        Return the first visible match, or None.

        Args:
            locators: Candidate locators in priority order
            hint: Optional text hint for the last-resort strategies

        Returns:
            ResolvedElement, or None when nothing visible matched
        """
        for locator in locators:
            element = await self._first_visible(locator)
            if element is not None:
                logger.debug(f"Resolved element with locator: {locator}")
                return ResolvedElement(element=element, locator=locator)

        for locator in hint_locators(hint):
            element = await self._first_visible(locator)
            if element is not None:
                logger.info(f"Resolved element by text fallback: {locator}")
                return ResolvedElement(element=element, locator=locator, via_hint=True)

        if locators or hint:
            logger.debug(f"No visible element for locators {list(locators)}")
        return None

    async def exists(self, locators: Sequence[str]) -> bool:
        """True if any locator has a visible first match."""
        return await self.resolve(locators) is not None

    async def _first_visible(self, locator: str) -> Optional[Any]:
        """Query one locator; only its first match is considered."""
        if not locator or not locator.strip():
            return None
        try:
            matches = await with_timeout(
                self._driver.query(locator),
                self._timeout_ms,
                operation=f"locate {locator}",
            )
            if not matches:
                return None
            first = matches[0]
            visible = await with_timeout(
                self._driver.is_visible(first),
                self._timeout_ms,
                operation=f"visibility of {locator}",
            )
        except BrowserTimeoutError as e:
            logger.debug(f"Locator timed out: {e}")
            return None
        except Exception as e:
            logger.debug(f"Locator failed: {locator}: {e}")
            return None

        if not visible:
            logger.debug(f"First match of {locator} is hidden")
            return None
        return first
