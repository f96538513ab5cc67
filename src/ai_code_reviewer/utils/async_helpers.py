"""Async utility functions for provider calls.

Reviews are never retried automatically, so the only helper needed around
the provider call is a timeout that maps onto the reviewer's own
TimeoutError.
"""

from __future__ import annotations

import asyncio
import builtins
from collections.abc import Awaitable
from typing import TypeVar

import structlog

from ai_code_reviewer.utils.errors import TimeoutError

log = structlog.get_logger()

T = TypeVar("T")


async def with_timeout(
    coro: Awaitable[T],
    timeout: float | None,
    error_message: str | None = None,
) -> T:
    """Execute an awaitable with a timeout.

    Args:
        coro: The coroutine to execute.
        timeout: Timeout in seconds. None waits indefinitely.
        error_message: Custom error message for timeout.

    Returns:
        The result of the coroutine.

    Raises:
        TimeoutError: If the operation times out.
    """
    try:
        return await asyncio.wait_for(coro, timeout=timeout)
    except builtins.TimeoutError as e:
        msg = error_message or f"Operation timed out after {timeout}s"
        log.warning("operation_timeout", timeout=timeout)
        raise TimeoutError(msg) from e

