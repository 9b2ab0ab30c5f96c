"""
Pytest configuration and fixtures.
"""

import pytest
from typing import Any, Dict, List, Optional, Union

from intent_replay.config import DriverSettings, ExecutionSettings, Settings
from intent_replay.interfaces.driver import IBrowserDriver, WaitCondition
from intent_replay.interfaces.semantic import ISemanticExecutor, SemanticResult


# =============================================================================
# MOCK CLASSES
# =============================================================================

class MockElement:
    """Mock element."""

    def __init__(self, name: str, visible: bool = True, text: str = ""):
        self.name = name
        self.visible = visible
        self.text = text
        self.value: Optional[str] = None

    def __repr__(self) -> str:
        return f"MockElement({self.name!r})"


class MockDriver(IBrowserDriver):
    """
    In-memory browser driver.

    ``elements`` maps a locator to the elements it matches. Every call is
    recorded in ``calls`` as ``(method, argument)``.
    """

    def __init__(
        self,
        url: str = "https://example.com/",
        elements: Optional[Dict[str, List[MockElement]]] = None,
    ):
        self.url = url
        self.elements: Dict[str, List[MockElement]] = elements or {}
        self.calls: List[tuple] = []
        self.errors: Dict[str, Exception] = {}
        self.navigate_errors: List[Exception] = []

    def add(self, locator: str, *elements: MockElement) -> None:
        self.elements[locator] = list(elements)

    def _maybe_fail(self, method: str) -> None:
        if method in self.errors:
            raise self.errors[method]

    @property
    def actions(self) -> List[tuple]:
        """Calls that act on the page."""
        return [c for c in self.calls if c[0] in ("navigate", "click", "fill", "select_option")]

    @property
    def queries(self) -> List[str]:
        return [c[1] for c in self.calls if c[0] == "query"]

    async def navigate(self, url: str, timeout_ms: int) -> None:
        self.calls.append(("navigate", url))
        if self.navigate_errors:
            raise self.navigate_errors.pop(0)
        self._maybe_fail("navigate")
        self.url = url

    async def query(self, locator: str) -> List[Any]:
        self.calls.append(("query", locator))
        self._maybe_fail("query")
        return list(self.elements.get(locator, []))

    async def is_visible(self, element: Any) -> bool:
        self.calls.append(("is_visible", element.name))
        return element.visible

    async def click(self, element: Any) -> None:
        self.calls.append(("click", element.name))
        self._maybe_fail("click")

    async def fill(self, element: Any, text: str) -> None:
        self.calls.append(("fill", f"{element.name}={text}"))
        self._maybe_fail("fill")
        element.value = text

    async def select_option(self, element: Any, value: str) -> None:
        self.calls.append(("select_option", f"{element.name}={value}"))
        self._maybe_fail("select_option")
        element.value = value

    async def current_url(self) -> str:
        self.calls.append(("current_url", self.url))
        return self.url

    async def wait_for(self, condition: WaitCondition, timeout_ms: int) -> None:
        self.calls.append(("wait_for", f"{condition.kind.value}:{condition.value}"))
        self._maybe_fail("wait_for")

    async def text_content(self, element: Any) -> str:
        self.calls.append(("text_content", element.name))
        return element.text

    async def screenshot(self) -> bytes:
        self.calls.append(("screenshot", None))
        return b"png"


class MockSemanticExecutor(ISemanticExecutor):
    """Semantic executor returning scripted results in order."""

    def __init__(self, *results: Union[bool, SemanticResult, Exception]):
        self._results = list(results)
        self.instructions: List[str] = []

    async def execute(self, instruction: str) -> SemanticResult:
        self.instructions.append(instruction)
        result = self._results.pop(0) if self._results else True
        if isinstance(result, Exception):
            raise result
        if isinstance(result, bool):
            return SemanticResult(success=result, error=None if result else "agent gave up")
        return result


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def settings():
    """Provide test settings with no backoff and short timeouts."""
    return Settings(
        driver=DriverSettings(
            timeout_ms=1000,
            locate_timeout_ms=500,
            navigation_timeout_ms=1000,
        ),
        execution=ExecutionSettings(
            navigate_retries=3,
            navigate_backoff_ms=0,
            preflight_poll_interval_ms=10,
            default_wait_ms=0,
            semantic_timeout_ms=1000,
        ),
    )


@pytest.fixture
def driver():
    """Provide an empty mock driver."""
    return MockDriver()


@pytest.fixture
def semantic():
    """Provide a semantic executor that always succeeds."""
    return MockSemanticExecutor()
