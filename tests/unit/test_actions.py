"""
Tests for the action primitives.
"""

import asyncio

import pytest

from conftest import MockDriver, MockElement
from intent_replay.actions import (
    ClickAction,
    FillAction,
    NavigateAction,
    SelectOptionAction,
    WaitAction,
)
from intent_replay.engine.locator_resolver import LocatorResolver, ResolutionHint
from intent_replay.engine.primitives import ActionPrimitives
from intent_replay.exceptions import BrowserTimeoutError, ElementNotFoundError
from intent_replay.interfaces.action import ActionParams, classify_exception
from intent_replay.interfaces.driver import WaitCondition, WaitKind
from intent_replay.outcome import ErrorKind
from intent_replay.spec.enums import ActionKind


class TestClassifyException:
    """Test mapping of driver exceptions to error kinds."""

    def test_timeouts(self):
        assert classify_exception(asyncio.TimeoutError()) is ErrorKind.TIMEOUT
        assert classify_exception(BrowserTimeoutError("slow", timeout_ms=10)) is ErrorKind.TIMEOUT

    def test_foreign_timeout_class(self):
        class TimeoutError(Exception):
            pass

        assert classify_exception(TimeoutError("playwright")) is ErrorKind.TIMEOUT

    def test_element_not_found(self):
        assert classify_exception(ElementNotFoundError("gone")) is ErrorKind.LOCATOR_NOT_FOUND

    def test_anything_else(self):
        assert classify_exception(RuntimeError("boom")) is ErrorKind.DRIVER_ERROR


class TestWaitCondition:
    """Test parsing of wait step values."""

    @pytest.mark.parametrize("text,kind,value", [
        ("selector:#done", WaitKind.SELECTOR, "#done"),
        ("url:/dashboard", WaitKind.URL, "/dashboard"),
        ("load:networkidle", WaitKind.LOAD, "networkidle"),
        ("1500", WaitKind.TIMEOUT, "1500"),
        (".spinner", WaitKind.SELECTOR, ".spinner"),
        ("", WaitKind.TIMEOUT, "2000"),
    ])
    def test_parse(self, text, kind, value):
        condition = WaitCondition.parse(text)
        assert condition.kind is kind
        assert condition.value == value


class TestInteractionActions:
    """Test element primitives."""

    @pytest.mark.asyncio
    async def test_click(self, driver):
        element = MockElement("btn")
        result = await ClickAction().execute(driver, ActionParams(element=element, locator="#btn"), 1000)

        assert result.success
        assert result.locator == "#btn"
        assert driver.actions == [("click", "btn")]

    @pytest.mark.asyncio
    async def test_click_without_element(self, driver):
        result = await ClickAction().execute(driver, ActionParams(), 1000)

        assert not result.success
        assert result.error.kind is ErrorKind.LOCATOR_NOT_FOUND
        assert driver.calls == []

    @pytest.mark.asyncio
    async def test_fill(self, driver):
        element = MockElement("email")
        result = await FillAction().execute(driver, ActionParams(element=element, value="a@b.com"), 1000)

        assert result.success
        assert element.value == "a@b.com"

    @pytest.mark.asyncio
    async def test_fill_requires_value(self, driver):
        result = await FillAction().execute(driver, ActionParams(element=MockElement("e")), 1000)

        assert not result.success
        assert "requires a value" in result.error.message

    @pytest.mark.asyncio
    async def test_fill_masks_sensitive_values(self, driver, caplog):
        element = MockElement("pw")
        params = ActionParams(element=element, locator="#password", value="hunter2")

        with caplog.at_level("INFO"):
            await FillAction(mask_sensitive=True).execute(driver, params, 1000)

        assert "hunter2" not in caplog.text
        assert "****" in caplog.text

    @pytest.mark.asyncio
    async def test_select_option(self, driver):
        element = MockElement("country")
        result = await SelectOptionAction().execute(driver, ActionParams(element=element, value="NZ"), 1000)

        assert result.success
        assert result.data == {"selected": "NZ"}

    @pytest.mark.asyncio
    async def test_driver_error(self, driver):
        driver.errors["click"] = RuntimeError("detached")
        result = await ClickAction().execute(driver, ActionParams(element=MockElement("b")), 1000)

        assert result.error.kind is ErrorKind.DRIVER_ERROR
        assert "detached" in result.error.message

    @pytest.mark.asyncio
    async def test_timeout(self):
        class HangingDriver(MockDriver):
            async def click(self, element):
                await asyncio.sleep(1)

        result = await ClickAction().execute(HangingDriver(), ActionParams(element=MockElement("b")), 50)

        assert result.error.kind is ErrorKind.TIMEOUT
        assert "timed out after 50ms" in result.error.message


class TestNavigateAction:
    """Test navigation with retry."""

    @pytest.mark.asyncio
    async def test_navigate(self, driver):
        result = await NavigateAction(attempts=3, backoff_ms=0).execute(
            driver, ActionParams(value="https://example.com/login"), 1000
        )

        assert result.success
        assert driver.url == "https://example.com/login"

    @pytest.mark.asyncio
    async def test_retries_transient_failures(self, driver):
        driver.navigate_errors = [RuntimeError("net::ERR_RESET"), RuntimeError("net::ERR_RESET")]

        result = await NavigateAction(attempts=3, backoff_ms=0).execute(
            driver, ActionParams(value="https://example.com/"), 1000
        )

        assert result.success
        assert len([c for c in driver.calls if c[0] == "navigate"]) == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_attempts(self, driver):
        driver.errors["navigate"] = RuntimeError("net::ERR_NAME_NOT_RESOLVED")

        result = await NavigateAction(attempts=2, backoff_ms=0).execute(
            driver, ActionParams(value="https://nope.invalid/"), 1000
        )

        assert not result.success
        assert result.error.kind is ErrorKind.DRIVER_ERROR
        assert "Failed to navigate" in result.error.message
        assert len([c for c in driver.calls if c[0] == "navigate"]) == 2

    @pytest.mark.asyncio
    async def test_timeout_kind_preserved(self):
        class HangingDriver(MockDriver):
            async def navigate(self, url, timeout_ms):
                await asyncio.sleep(1)

        result = await NavigateAction(attempts=1, backoff_ms=0).execute(
            HangingDriver(), ActionParams(value="https://example.com/"), 50
        )

        assert result.error.kind is ErrorKind.TIMEOUT

    @pytest.mark.asyncio
    async def test_requires_url(self, driver):
        result = await NavigateAction().execute(driver, ActionParams(value=""), 1000)

        assert not result.success
        assert driver.calls == []


class TestWaitAction:
    """Test wait primitive."""

    @pytest.mark.asyncio
    async def test_wait_for_selector(self, driver):
        result = await WaitAction().execute(driver, ActionParams(value="selector:#done"), 1000)

        assert result.success
        assert ("wait_for", "selector:#done") in driver.calls

    @pytest.mark.asyncio
    async def test_plain_sleep_does_not_call_driver(self, driver):
        result = await WaitAction().execute(driver, ActionParams(value="10"), 1000)

        assert result.success
        assert driver.calls == []

    @pytest.mark.asyncio
    async def test_wait_failure(self, driver):
        driver.errors["wait_for"] = RuntimeError("never appeared")
        result = await WaitAction().execute(driver, ActionParams(value="url:/done"), 1000)

        assert result.error.kind is ErrorKind.DRIVER_ERROR


class TestActionPrimitives:
    """Test dispatch through ActionPrimitives."""

    @pytest.fixture
    def primitives(self, driver, settings):
        return ActionPrimitives(driver, LocatorResolver(driver, 500), settings)

    @pytest.mark.asyncio
    async def test_fill_resolves_element(self, primitives, driver):
        driver.add("[name=email]", MockElement("email"))

        result = await primitives.perform(ActionKind.FILL, ["#email", "[name=email]"], "a@b.com")

        assert result.success
        assert result.locator == "[name=email]"
        assert ("fill", "email=a@b.com") in driver.actions

    @pytest.mark.asyncio
    async def test_locator_not_found(self, primitives, driver):
        result = await primitives.perform(
            ActionKind.CLICK, ["#save"], hint=ResolutionHint(text="Save")
        )

        assert result.error.kind is ErrorKind.LOCATOR_NOT_FOUND
        assert "#save" in result.error.message
        assert "text:Save" in result.error.message
        assert driver.actions == []

    @pytest.mark.asyncio
    async def test_no_locators(self, primitives):
        result = await primitives.perform(ActionKind.CLICK, [])

        assert result.error.kind is ErrorKind.LOCATOR_NOT_FOUND
        assert result.error.message == "Step has no locators"

    @pytest.mark.asyncio
    async def test_navigate_ignores_locators(self, primitives, driver):
        result = await primitives.perform(ActionKind.NAVIGATE, ["#ignored"], "https://example.com/a")

        assert result.success
        assert driver.queries == []

    @pytest.mark.asyncio
    async def test_wait(self, primitives, driver):
        result = await primitives.perform(ActionKind.WAIT, [], "selector:.ready")

        assert result.success
        assert ("wait_for", "selector:.ready") in driver.calls
