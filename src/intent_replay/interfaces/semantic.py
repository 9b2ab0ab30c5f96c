"""
Semantic Executor Interface - open-ended, natural-language page actions.

The engine hands one instruction at a time to a semantic executor (an
LLM-driven browser agent) and only inspects whether it succeeded.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Union


@dataclass
class SemanticResult:
    """
    Result reported by a semantic executor.
    
    Attributes:
        success: Whether the instruction was carried out
        error: Failure description
        data: Anything the executor wants to hand back (opaque to the engine)
    """
    success: bool
    error: Optional[str] = None
    data: Optional[Any] = None


class ISemanticExecutor(ABC):
    """Performs a single natural-language instruction on the current page."""

    @abstractmethod
    async def execute(self, instruction: str) -> SemanticResult:
        """
        Carry out one instruction.
        
        Args:
            instruction: Fully substituted natural-language instruction
            
        Returns:
            SemanticResult describing the outcome
        """
        ...


SemanticCallable = Callable[[str], Awaitable[Union[SemanticResult, bool, dict]]]


class CallableSemanticExecutor(ISemanticExecutor):
    """
    Adapts a plain async function into a semantic executor.
    
    The function may return a ``SemanticResult``, a bool, or a dict with
    ``success``/``error``/``data`` keys.
    
    Example:
        >>> async def act(instruction: str) -> bool:
        ...     return await agent.act(instruction)
        >>> executor = CallableSemanticExecutor(act)
    """

    def __init__(self, func: SemanticCallable):
        self._func = func

    async def execute(self, instruction: str) -> SemanticResult:
        result = await self._func(instruction)
        if isinstance(result, SemanticResult):
            return result
        if isinstance(result, bool):
            return SemanticResult(success=result, error=None if result else "executor returned False")
        if isinstance(result, dict):
            return SemanticResult(
                success=bool(result.get("success")),
                error=result.get("error"),
                data=result.get("data"),
            )
        raise TypeError(f"Unsupported semantic executor result: {type(result).__name__}")


class IScreenshotComparator(ABC):
    """Decides whether a screenshot matches an expected reference."""

    @abstractmethod
    async def matches(self, screenshot: bytes, expected: str) -> bool:
        """
        Compare a screenshot to a reference.
        
        Args:
            screenshot: PNG bytes of the current viewport
            expected: Reference identifier from the validation (path, key, ...)
        """
        ...
