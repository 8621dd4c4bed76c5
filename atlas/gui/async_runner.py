"""Event loop thread that owns all atlas state."""

import asyncio
import logging
from concurrent.futures import Future
from functools import partial
from typing import Any, Callable, Coroutine

from PyQt6.QtCore import QThread, pyqtSignal

logger = logging.getLogger(__name__)


class AsyncLoopThread(QThread):
    """Worker thread running one asyncio event loop for the atlas context.

    Every load, click and toggle is submitted here, so the loop is the single
    writer of the layer registry and highlight state. Results reach the GUI
    thread only through queued signals.
    """

    task_failed = pyqtSignal(str)  # description of the failed task

    def __init__(self):
        """Initialize loop thread."""
        super().__init__()
        self.loop = asyncio.new_event_loop()

    def run(self):
        """Run the event loop until stop() is called."""
        asyncio.set_event_loop(self.loop)
        try:
            self.loop.run_forever()
        finally:
            pending = asyncio.all_tasks(self.loop)
            for task in pending:
                task.cancel()
            if pending:
                self.loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
            self.loop.close()
            logger.debug("Event loop closed")

    def submit(self, coro: Coroutine, description: str = "Task") -> Future:
        """
        Schedule a coroutine on the loop from any thread.

        Args:
            coro: Coroutine to run
            description: Label used when reporting a failure

        Returns:
            Future resolving to the coroutine's result
        """
        future = asyncio.run_coroutine_threadsafe(coro, self.loop)
        future.add_done_callback(partial(self._on_done, description))
        return future

    def submit_call(self, func: Callable[..., Any], *args, description: str = "Task") -> Future:
        """Run a plain function on the loop, with the same error reporting as submit()."""

        async def call():
            return func(*args)

        return self.submit(call(), description)

    def _on_done(self, description: str, future: Future):
        """Log and report failures of submitted work."""
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error(f"{description} failed: {exc}", exc_info=exc)
            self.task_failed.emit(f"{description} failed: {exc}")

    def stop(self):
        """Stop the loop and wait for the thread to finish."""
        if self.loop.is_running():
            self.loop.call_soon_threadsafe(self.loop.stop)
        self.wait()
