"""
Playwright Driver - Implementation of IBrowserDriver using Playwright.

Element handles returned by ``query`` are Playwright ``ElementHandle``s;
the engine only hands them back to this driver.
"""

import asyncio
from typing import Any, List, Optional
import logging

from playwright.async_api import Error as PlaywrightError

from intent_replay.exceptions.browser import BrowserLaunchError
from intent_replay.interfaces.driver import IBrowserDriver, WaitCondition, WaitKind

logger = logging.getLogger(__name__)

# Visible: laid out, not hidden by style, not transparent, and either in the
# viewport or inside the scrollable document area.
_VISIBILITY_SCRIPT = """el => {
    if (!el.isConnected) return false;
    const rect = el.getBoundingClientRect();
    if (rect.width === 0 || rect.height === 0) return false;
    const style = window.getComputedStyle(el);
    if (style.display === 'none') return false;
    if (style.visibility === 'hidden' || style.visibility === 'collapse') return false;
    if (parseFloat(style.opacity) === 0) return false;
    const vw = window.innerWidth || document.documentElement.clientWidth;
    const vh = window.innerHeight || document.documentElement.clientHeight;
    if (rect.bottom > 0 && rect.right > 0 && rect.top < vh && rect.left < vw) return true;
    const doc = document.scrollingElement || document.documentElement;
    const top = rect.top + window.scrollY;
    const left = rect.left + window.scrollX;
    return top + rect.height > 0 && left + rect.width > 0
        && top < doc.scrollHeight && left < doc.scrollWidth;
}"""


class PlaywrightDriver(IBrowserDriver):
    """
    Playwright implementation of IBrowserDriver.

    Wraps one Playwright Page. Every method may raise Playwright errors;
    the engine bounds and classifies them.

    Example:
        >>> driver = PlaywrightDriver(page)
        >>> await driver.navigate("https://example.com", timeout_ms=30000)
    """

    def __init__(self, page: Any, wait_until: str = "domcontentloaded"):
        """
        Initialize the driver.

        Args:
            page: Playwright Page object
            wait_until: Load state ``navigate`` waits for
        """
        self._page = page
        self._wait_until = wait_until

    @property
    def page(self) -> Any:
        return self._page

    async def navigate(self, url: str, timeout_ms: int) -> None:
        """Navigate to URL."""
        await self._page.goto(url, timeout=timeout_ms, wait_until=self._wait_until)

    async def query(self, locator: str) -> List[Any]:
        """Find all matching elements."""
        return await self._page.query_selector_all(locator)

    async def is_visible(self, element: Any) -> bool:
        """Check visibility, including viewport and scrollability."""
        return bool(await element.evaluate(_VISIBILITY_SCRIPT))

    async def click(self, element: Any) -> None:
        await element.click()

    async def fill(self, element: Any, text: str) -> None:
        await element.fill(text)

    async def select_option(self, element: Any, value: str) -> None:
        """Select by value or label."""
        await element.select_option(value)

    async def current_url(self) -> str:
        return self._page.url

    async def wait_for(self, condition: WaitCondition, timeout_ms: int) -> None:
        """Wait for a selector, URL fragment, load state, or a fixed time."""
        if condition.kind is WaitKind.SELECTOR:
            await self._page.wait_for_selector(condition.value, state="visible", timeout=timeout_ms)
        elif condition.kind is WaitKind.URL:
            fragment = condition.value
            await self._page.wait_for_url(lambda url: fragment in url, timeout=timeout_ms)
        elif condition.kind is WaitKind.LOAD:
            await self._page.wait_for_load_state(condition.value or "load", timeout=timeout_ms)
        else:
            delay_ms = min(int(condition.value or 0), timeout_ms)
            await asyncio.sleep(delay_ms / 1000)

    async def text_content(self, element: Any) -> str:
        """Get visible text (falls back to the raw text content)."""
        try:
            return await element.inner_text()
        except PlaywrightError:
            return await element.text_content() or ""

    async def screenshot(self) -> bytes:
        return await self._page.screenshot(full_page=False)


class PlaywrightSession:
    """
    Launch a browser and expose one page as a ``PlaywrightDriver``.

    Example:
        >>> async with PlaywrightSession(headless=True) as driver:
        ...     result = await WorkflowRunner(driver).run(spec, variables)
    """

    def __init__(
        self,
        headless: bool = True,
        browser_type: str = "chromium",
        wait_until: str = "domcontentloaded",
        **launch_options: Any,
    ):
        self._headless = headless
        self._browser_type = browser_type
        self._wait_until = wait_until
        self._launch_options = launch_options
        self._playwright: Any = None
        self._browser: Any = None
        self._context: Any = None
        self.driver: Optional[PlaywrightDriver] = None

    async def start(self) -> PlaywrightDriver:
        """Launch the browser and open a page."""
        try:
            from playwright.async_api import async_playwright

            self._playwright = await async_playwright().start()
            launcher = getattr(self._playwright, self._browser_type, None)
            if launcher is None:
                raise BrowserLaunchError(f"Unknown browser type: {self._browser_type}")

            self._browser = await launcher.launch(headless=self._headless, **self._launch_options)
            self._context = await self._browser.new_context()
            page = await self._context.new_page()
        except BrowserLaunchError:
            await self.close()
            raise
        except Exception as e:
            await self.close()
            raise BrowserLaunchError(f"Failed to launch browser: {e}")

        logger.info(f"Launched {self._browser_type} browser (headless={self._headless})")
        self.driver = PlaywrightDriver(page, wait_until=self._wait_until)
        return self.driver

    async def close(self) -> None:
        """Close the browser and cleanup."""
        if self._context:
            await self._context.close()
            self._context = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        self.driver = None

    async def __aenter__(self) -> PlaywrightDriver:
        return await self.start()

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
