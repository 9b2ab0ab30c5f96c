"""
Retry and timeout helpers for driver calls.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Tuple, Type, TypeVar
import logging

from intent_replay.exceptions import BrowserTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    """
    Configuration for retry behavior.
    
    Attributes:
        max_attempts: Maximum number of attempts
        initial_delay_ms: Delay before the first retry
        max_delay_ms: Maximum delay between retries
        backoff_multiplier: Multiplier applied to the delay after each retry
            (1.0 gives a fixed backoff)
        retry_on: Exception types to retry on
        on_retry: Callback function called on each retry
    """
    max_attempts: int = 3
    initial_delay_ms: int = 2000
    max_delay_ms: int = 30000
    backoff_multiplier: float = 1.0
    retry_on: Tuple[Type[Exception], ...] = (Exception,)
    on_retry: Optional[Callable[[int, Exception], None]] = None
    
    @classmethod
    def fixed(cls, attempts: int, delay_ms: int, **kwargs: Any) -> "RetryConfig":
        """Retry ``attempts`` times with a constant delay."""
        return cls(
            max_attempts=max(1, attempts),
            initial_delay_ms=delay_ms,
            max_delay_ms=max(delay_ms, 0),
            backoff_multiplier=1.0,
            **kwargs,
        )


async def retry_async(
    func: Callable[..., Awaitable[T]],
    config: RetryConfig,
    *args: Any,
    **kwargs: Any,
) -> T:
    """
    Execute a coroutine function with retry logic.
    
    Args:
        func: Async function to execute
        config: Retry configuration
        *args: Function arguments
        **kwargs: Function keyword arguments
        
    Returns:
        Function result
        
    Raises:
        The last exception if all retries fail
    """
    last_exception: Optional[Exception] = None
    delay_ms: float = config.initial_delay_ms
    
    for attempt in range(config.max_attempts):
        try:
            return await func(*args, **kwargs)
        except config.retry_on as e:
            last_exception = e
            
            if attempt == config.max_attempts - 1:
                break
            
            logger.warning(
                f"Attempt {attempt + 1}/{config.max_attempts} failed: {e}. "
                f"Retrying in {int(delay_ms)}ms..."
            )
            
            if config.on_retry:
                config.on_retry(attempt + 1, e)
            
            await asyncio.sleep(delay_ms / 1000)
            delay_ms = min(delay_ms * config.backoff_multiplier, config.max_delay_ms)
    
    raise last_exception  # type: ignore


async def with_timeout(
    coro: Awaitable[T],
    timeout_ms: int,
    operation: str = "operation",
) -> T:
    """
    Await a coroutine with a timeout.
    
    Args:
        coro: Coroutine to await
        timeout_ms: Timeout in milliseconds
        operation: Name used in the timeout error
        
    Returns:
        Coroutine result
        
    Raises:
        BrowserTimeoutError if the timeout is exceeded
    """
    try:
        return await asyncio.wait_for(coro, timeout=timeout_ms / 1000)
    except asyncio.TimeoutError:
        raise BrowserTimeoutError(
            f"{operation} timed out after {timeout_ms}ms",
            timeout_ms=timeout_ms,
            operation=operation,
        )
