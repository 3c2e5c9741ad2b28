import asyncio
import threading
from typing import Any, Awaitable, Callable, TypeVar

T = TypeVar("T")


class _BackgroundLoop:
    """Event loop on a daemon thread used by the blocking operations."""

    loop: asyncio.AbstractEventLoop | None
    thread: threading.Thread | None

    def __init__(self) -> None:
        self.loop = None
        self.thread = None
        self._lock = threading.Lock()

    def get(self) -> asyncio.AbstractEventLoop:
        with self._lock:
            if self.loop is not None and not self.loop.is_closed():
                return self.loop
            loop = asyncio.new_event_loop()
            self.thread = threading.Thread(
                target=self._serve, args=(loop,), daemon=True
            )
            self.thread.start()
            self.loop = loop
            return loop

    @staticmethod
    def _serve(loop: asyncio.AbstractEventLoop) -> None:
        asyncio.set_event_loop(loop)
        loop.run_forever()


_background = _BackgroundLoop()


def run_sync(
    afunc: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any
) -> T:
    """Run a coroutine function to completion from blocking code."""
    loop = _background.get()
    future = asyncio.run_coroutine_threadsafe(afunc(*args, **kwargs), loop)
    return future.result()
