"""Async-to-sync bridge for callers without a running event loop."""

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

T = TypeVar("T")


def run_sync(coro: Coroutine[Any, Any, T]) -> T:
    """Execute a coroutine synchronously in a new event loop.

    Intended for synchronous callers such as the CLI or a thread-based
    request handler. Must not be called from inside a running loop.

    Args:
        coro: Coroutine to run to completion.

    Returns:
        The coroutine's result. Exceptions propagate unchanged.
    """
    return asyncio.run(coro)
