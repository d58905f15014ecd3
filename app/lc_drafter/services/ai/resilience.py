"""
Timeout and retry helpers for outbound model calls.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, TypeVar

from .exceptions import AITimeoutError, RetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryOutcome(Generic[T]):
    """Successful result of a retried operation and the attempts it took."""

    value: T
    attempts: int


async def run_with_timeout(awaitable: Awaitable[T], timeout: float, stage: str) -> T:
    """
    Race a call against a timer.

    Whichever settles first decides the outcome. On timeout the pending call is
    cancelled and its eventual result discarded.

    Raises:
        AITimeoutError: If the call does not finish within ``timeout`` seconds.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.warning("%s call timed out after %.1f seconds", stage.capitalize(), timeout)
        raise AITimeoutError(stage, timeout) from e


def backoff_delay(attempt: int, initial_delay: float, max_delay: float) -> float:
    """Delay before the attempt following ``attempt`` (1-indexed)."""
    return min(initial_delay * (2 ** (attempt - 1)), max_delay)


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    *,
    max_retries: int,
    initial_delay: float,
    max_delay: float,
    description: str,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> RetryOutcome[T]:
    """
    Run an async operation, retrying failures with exponential backoff.

    Args:
        operation: Zero-argument factory returning a fresh awaitable per attempt.
        max_retries: Retries after the first attempt (total attempts = max_retries + 1).
        initial_delay: Delay in seconds before the first retry.
        max_delay: Upper bound for any single delay.
        description: Human-readable name used in logs and the final error.
        sleep: Awaitable sleep function (injected in tests).

    Returns:
        RetryOutcome with the operation's result and the number of attempts.

    Raises:
        RetryExhaustedError: If every attempt fails. The message includes the
            attempt count and the last error.
    """
    max_attempts = max_retries + 1
    last_error: Exception | None = None

    for attempt in range(1, max_attempts + 1):
        try:
            value = await operation()
            if attempt > 1:
                logger.info("%s succeeded on attempt %d/%d", description, attempt, max_attempts)
            return RetryOutcome(value=value, attempts=attempt)
        except Exception as e:
            last_error = e
            logger.warning(
                "%s failed (attempt %d/%d): %s", description, attempt, max_attempts, e
            )

        if attempt < max_attempts:
            delay = backoff_delay(attempt, initial_delay, max_delay)
            logger.info("Retrying %s in %.2f seconds...", description, delay)
            await sleep(delay)

    logger.error("%s failed after %d attempts", description, max_attempts)
    raise RetryExhaustedError(description, max_attempts, last_error)
