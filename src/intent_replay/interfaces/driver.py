"""
Browser Driver Interface - The capabilities the engine needs from a browser.

Any browser-automation layer (Playwright, a remote CDP bridge, a test fake)
can drive workflows by implementing ``IBrowserDriver``. Element handles are
opaque to the engine: it only passes back whatever ``query`` returned.

Example:
    >>> from intent_replay.browsers import PlaywrightDriver
    >>> driver = PlaywrightDriver(page)
    >>> elements = await driver.query("#email")
    >>> if elements and await driver.is_visible(elements[0]):
    ...     await driver.fill(elements[0], "a@b.com")
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional


class WaitKind(Enum):
    """Conditions a driver can wait for."""
    SELECTOR = "selector"   # an element matching a locator becomes visible
    URL = "url"             # the current URL contains a fragment
    LOAD = "load"           # the page reaches a load state
    TIMEOUT = "timeout"     # plain sleep


@dataclass(frozen=True)
class WaitCondition:
    """
    A condition for ``IBrowserDriver.wait_for``.
    
    Attributes:
        kind: What to wait for
        value: Locator, URL fragment, load state, or milliseconds
    """
    kind: WaitKind
    value: str = ""
    
    @classmethod
    def parse(cls, text: Optional[str], default_ms: int = 2000) -> "WaitCondition":
        """
        Parse a wait step's value.
        
        ``selector:#x``, ``url:/path`` and ``load:networkidle`` are explicit;
        a bare number is a sleep in milliseconds; anything else is a locator.
        """
        text = (text or "").strip()
        if not text:
            return cls(WaitKind.TIMEOUT, str(default_ms))
        prefix, sep, rest = text.partition(":")
        if sep and prefix.lower() in {k.value for k in WaitKind}:
            return cls(WaitKind(prefix.lower()), rest.strip())
        if text.isdigit():
            return cls(WaitKind.TIMEOUT, text)
        return cls(WaitKind.SELECTOR, text)


class IBrowserDriver(ABC):
    """
    Abstract interface for the browser the engine acts on.
    
    Implementations may raise any exception from these methods; the engine
    wraps every call with a timeout and converts failures into step errors.
    """

    @abstractmethod
    async def navigate(self, url: str, timeout_ms: int) -> None:
        """
        Navigate the page to a URL.
        
        Args:
            url: Absolute URL
            timeout_ms: Maximum time for this navigation
        """
        ...

    @abstractmethod
    async def query(self, locator: str) -> List[Any]:
        """
        Find every element matching a locator.
        
        Args:
            locator: CSS, ``text=``, ``role=``, ``xpath=`` or any other
                locator string the driver understands
            
        Returns:
            Matching element handles in document order (possibly empty)
        """
        ...

    @abstractmethod
    async def is_visible(self, element: Any) -> bool:
        """
        Check whether an element can be seen and interacted with.
        
        Visible means: non-zero bounding box, not ``display:none`` or
        ``visibility:hidden``, not fully transparent, and intersecting the
        viewport or scrollable into it.
        """
        ...

    @abstractmethod
    async def click(self, element: Any) -> None:
        """Click an element."""
        ...

    @abstractmethod
    async def fill(self, element: Any, text: str) -> None:
        """Replace an input's content with text."""
        ...

    @abstractmethod
    async def select_option(self, element: Any, value: str) -> None:
        """Select an option of a <select> by value or label."""
        ...

    @abstractmethod
    async def current_url(self) -> str:
        """Get the current page URL."""
        ...

    @abstractmethod
    async def wait_for(self, condition: WaitCondition, timeout_ms: int) -> None:
        """
        Block until a condition holds.
        
        Raises:
            Any exception when the condition does not hold within timeout_ms
        """
        ...

    @abstractmethod
    async def text_content(self, element: Any) -> str:
        """Get the visible text of an element."""
        ...

    @abstractmethod
    async def screenshot(self) -> bytes:
        """Capture the current viewport as PNG bytes."""
        ...
