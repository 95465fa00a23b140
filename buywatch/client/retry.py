"""
Retry Wrapper for RPC Calls

Runs an async operation up to a fixed number of attempts with a fixed delay
between them.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable

from ..config import MAX_RETRIES, RETRY_DELAY_SECONDS
from ..errors import RetryExhausted

logger = logging.getLogger(__name__)


async def with_retry(operation: Callable[[], Awaitable[Any]],
                     max_attempts: int = MAX_RETRIES,
                     delay: float = RETRY_DELAY_SECONDS) -> Any:
    """
    Await ``operation()`` until it succeeds or the attempts run out.

    Args:
        operation: Zero-argument callable returning an awaitable
        max_attempts: Total number of invocations allowed
        delay: Seconds to wait between failed attempts

    Returns:
        Result of the first successful invocation

    Raises:
        RetryExhausted: if the last attempt fails
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except Exception as e:
            logger.warning(f"Attempt {attempt}/{max_attempts} failed: {e}")
            if attempt == max_attempts:
                raise RetryExhausted(f"Max retries reached: {e}") from e
            await asyncio.sleep(delay)
