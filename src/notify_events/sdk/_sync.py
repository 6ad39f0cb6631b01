"""Background thread event loop for sync wrappers.

Provides _run_sync() which bridges async coroutines into synchronous
calling contexts without "event loop already running" errors.

Two strategies:
  - No event loop running: uses asyncio.run() (simplest path)
  - Event loop already running (Jupyter, etc.): dispatches to a
    background daemon thread with its own event loop
"""

from __future__ import annotations

import asyncio
import threading
from typing import Awaitable, Callable, Coroutine, TypeVar

T = TypeVar("T")

_loop: asyncio.AbstractEventLoop | None = None
_thread: threading.Thread | None = None
_lock = threading.Lock()


def _get_loop() -> asyncio.AbstractEventLoop:
    """Get or create a background event loop running in a daemon thread."""
    global _loop, _thread
    with _lock:
        if _loop is None or _loop.is_closed():
            _loop = asyncio.new_event_loop()
            _thread = threading.Thread(
                target=_loop.run_forever, name="notify-events-sync", daemon=True
            )
            _thread.start()
    return _loop


def _run_sync(coro: Coroutine[object, object, T]) -> T:
    """Run an async coroutine from synchronous code.

    If no event loop is running, uses ``asyncio.run()``.
    If an event loop is already running (e.g., Jupyter), dispatches
    to a background daemon thread via ``run_coroutine_threadsafe()``.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    future = asyncio.run_coroutine_threadsafe(coro, _get_loop())
    return future.result()


def _run_sync_closing(
    coro: Coroutine[object, object, T],
    aclose: Callable[[], Awaitable[None]],
) -> T:
    """Run *coro* like ``_run_sync()``, then await ``aclose()`` on the same loop.

    Pooled connections are bound to the loop that opened them.  Under
    ``asyncio.run()`` that loop is gone once the call returns, so anything
    *coro* opened has to be released before leaving it.
    """

    async def _scoped() -> T:
        try:
            return await coro
        finally:
            await aclose()

    return _run_sync(_scoped())
