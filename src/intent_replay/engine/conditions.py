"""
Condition evaluation - skip conditions, pre-flight checks and validation.

All three read page state only; none of them acts on the page.
"""

import asyncio
import logging
import re
from typing import Callable, List, Optional, TYPE_CHECKING

from intent_replay.exceptions import BrowserTimeoutError
from intent_replay.engine.locator_resolver import LocatorResolver
from intent_replay.outcome import ErrorKind, StepError
from intent_replay.spec.enums import SkipConditionKind, ValidationKind
from intent_replay.utils.retry import with_timeout

if TYPE_CHECKING:
    from intent_replay.interfaces.driver import IBrowserDriver
    from intent_replay.interfaces.semantic import IScreenshotComparator
    from intent_replay.spec.models import PreFlightCheck, SkipCondition, Validation

logger = logging.getLogger(__name__)

Substitute = Callable[[Optional[str]], str]

REGEX_PREFIX = "re:"


def url_matches(url: str, pattern: str) -> bool:
    """
    Match a URL against a pattern.

    Plain patterns match as substrings; ``re:``-prefixed patterns are
    regular expressions searched anywhere in the URL.

    Example:
        >>> url_matches("https://app.example.com/dashboard?x=1", "/dashboard")
        True
        >>> url_matches("https://app.example.com/users/42", r"re:/users/\\d+$")
        True
    """
    if not pattern:
        return False
    if pattern.startswith(REGEX_PREFIX):
        try:
            return re.search(pattern[len(REGEX_PREFIX):], url) is not None
        except re.error as e:
            logger.warning(f"Invalid URL pattern {pattern!r}: {e}")
            return False
    return pattern in url


def _normalize_text(text: Optional[str]) -> str:
    return " ".join((text or "").split())


class ConditionEvaluator:
    """
    Evaluates a step's conditions against the live page.

    Usage:
        evaluator = ConditionEvaluator(driver, resolver)
        reason = await evaluator.skip_reason(step.skip_conditions, substitute)
        error = await evaluator.preflight(step.pre_flight_checks)
        error = await evaluator.validate(step.validation, substitute)
    """

    def __init__(
        self,
        driver: "IBrowserDriver",
        resolver: LocatorResolver,
        comparator: Optional["IScreenshotComparator"] = None,
        poll_interval_ms: int = 250,
        timeout_ms: int = 5000,
    ):
        self._driver = driver
        self._resolver = resolver
        self._comparator = comparator
        self._poll_interval_ms = poll_interval_ms
        self._timeout_ms = timeout_ms

    async def current_url(self) -> str:
        return await with_timeout(self._driver.current_url(), self._timeout_ms, operation="current url")

    # ─────────────────────────────────────────────────────────────
    # Skip conditions
    # ─────────────────────────────────────────────────────────────

    async def skip_reason(
        self,
        conditions: List["SkipCondition"],
        substitute: Substitute,
    ) -> Optional[str]:
        """Reason of the first matching skip condition, or None."""
        for condition in conditions:
            value = substitute(condition.value)
            try:
                if condition.kind is SkipConditionKind.URL_MATCHES:
                    matched = url_matches(await self.current_url(), value)
                else:
                    matched = await self._resolver.exists([value])
            except Exception as e:
                logger.warning(f"Skip condition {condition.kind.value} could not be evaluated: {e}")
                continue
            if matched:
                return condition.reason or f"{condition.kind.value} matched {value}"
        return None

    # ─────────────────────────────────────────────────────────────
    # Pre-flight checks
    # ─────────────────────────────────────────────────────────────

    async def preflight(self, checks: List["PreFlightCheck"]) -> Optional[StepError]:
        """
        Verify every pre-flight check.

        Returns:
            The error of the first required check that did not resolve
        """
        for check in checks:
            found = await self._resolve_check(check)
            if found:
                continue
            if check.required:
                kind = ErrorKind.TIMEOUT if check.wait_for else ErrorKind.LOCATOR_NOT_FOUND
                return StepError(
                    kind,
                    f"Pre-flight check failed: {check.candidates} not found within {check.timeout}ms",
                )
            logger.warning(f"Optional pre-flight element missing: {check.candidates}")
        return None

    async def _resolve_check(self, check: "PreFlightCheck") -> bool:
        if not check.wait_for:
            if not check.timeout:
                return await self._resolver.exists(check.candidates)
            try:
                return await with_timeout(
                    self._resolver.exists(check.candidates),
                    check.timeout,
                    operation=f"pre-flight check {check.locator}",
                )
            except BrowserTimeoutError as e:
                logger.warning(str(e))
                return False

        loop = asyncio.get_running_loop()
        deadline = loop.time() + check.timeout / 1000
        while True:
            if await self._resolver.exists(check.candidates):
                return True
            remaining = deadline - loop.time()
            if remaining <= 0:
                return False
            await asyncio.sleep(min(self._poll_interval_ms / 1000, remaining))

    # ─────────────────────────────────────────────────────────────
    # Validation
    # ─────────────────────────────────────────────────────────────

    async def validate(
        self,
        validation: Optional["Validation"],
        substitute: Substitute,
    ) -> Optional[StepError]:
        """
        Evaluate a step's validation.

        Returns:
            None when it passed (or there is none), else a validation-failed error
        """
        if validation is None:
            return None

        expected = substitute(validation.expected) if validation.expected is not None else None
        try:
            passed, message = await self._check(validation, expected)
        except Exception as e:
            passed, message = False, f"could not be evaluated: {e}"

        if passed:
            return None
        return StepError(ErrorKind.VALIDATION_FAILED, f"{validation.kind.value} {message}")

    async def _check(self, validation: "Validation", expected: Optional[str]) -> "tuple[bool, str]":
        kind = validation.kind

        if kind is ValidationKind.URL_MATCHES:
            url = await self.current_url()
            return url_matches(url, expected or ""), f"expected URL matching {expected!r}, got {url!r}"

        if kind is ValidationKind.ELEMENT_EXISTS:
            locator = validation.locator or expected or ""
            return await self._resolver.exists([locator]), f"expected element {locator!r} to exist"

        if kind is ValidationKind.TEXT_EQUALS:
            found = await self._resolver.resolve([validation.locator or ""])
            if found is None:
                return False, f"element {validation.locator!r} not found"
            actual = await with_timeout(
                self._driver.text_content(found.element), self._timeout_ms, operation="text content"
            )
            return (
                _normalize_text(actual) == _normalize_text(expected),
                f"expected text {expected!r}, got {actual!r}",
            )

        # Screenshot comparison is delegated; pixel logic lives elsewhere
        if self._comparator is None:
            return False, "no screenshot comparator configured"
        screenshot = await with_timeout(self._driver.screenshot(), self._timeout_ms, operation="screenshot")
        matched = await self._comparator.matches(screenshot, expected or "")
        return matched, f"screenshot does not match {expected!r}"
