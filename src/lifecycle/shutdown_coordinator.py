"""
Graceful shutdown for the watch face process.

One coordinator owns the exit path: it waits for SIGINT/SIGTERM (or a failed
background task), then runs every registered IShutdownHandler from the
highest priority down, each under its own timeout.
"""

import asyncio
import signal
from typing import List, Optional

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class ShutdownCoordinator:
    """
    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(WatchFaceShutdownHandler(watch_face))   # 130
        coordinator.register(APIServerShutdownHandler(api_wrapper))  # 90
        coordinator.watch(api_task)

        coordinator.setup_signal_handlers(loop)
        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()

    Args:
        timeout_per_handler: Seconds one handler may take before it is abandoned
        total_timeout: Seconds after which remaining handlers are skipped
    """

    def __init__(self, timeout_per_handler: float = 5.0, total_timeout: float = 15.0):
        self.timeout_per_handler = timeout_per_handler
        self.total_timeout = total_timeout
        self._handlers: List[IShutdownHandler] = []
        self._watched: List[asyncio.Task] = []
        self._stop_event: Optional[asyncio.Event] = None
        self._reason: Optional[str] = None

    @property
    def shutdown_reason(self) -> Optional[str]:
        return self._reason

    @property
    def _event(self) -> asyncio.Event:
        # Created on first use so it binds to the running loop
        if self._stop_event is None:
            self._stop_event = asyncio.Event()
        return self._stop_event

    # ------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------

    def register(self, handler: IShutdownHandler) -> None:
        """Add a handler; it needs a shutdown_priority and an async shutdown()."""
        for attr in ("shutdown_priority", "shutdown"):
            if not hasattr(handler, attr):
                raise ValueError(f"{handler!r} is not a shutdown handler (missing {attr})")

        self._handlers.append(handler)
        log.debug(f"Registered {type(handler).__name__}", priority=handler.shutdown_priority)

    def watch(self, task: asyncio.Task) -> None:
        """Shut down if this task ends with an exception."""
        self._watched.append(task)

    def get_handler(self, handler_type: type) -> Optional[IShutdownHandler]:
        return next((h for h in self._handlers if isinstance(h, handler_type)), None)

    # ------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """Route SIGINT and SIGTERM to request_shutdown()."""
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, self.request_shutdown, sig.name)
        log.info("Signal handlers installed (SIGINT, SIGTERM)")

    def request_shutdown(self, reason: str) -> None:
        self._reason = reason
        log.info(f"{reason} → triggering shutdown")
        self._event.set()

    def _first_failure(self) -> Optional[asyncio.Task]:
        for task in self._watched:
            if task.done() and not task.cancelled() and task.exception() is not None:
                return task
        return None

    async def wait_for_shutdown(self) -> None:
        """
        Block until shutdown is requested or a watched task fails.

        Watched tasks that finish cleanly are simply no longer watched.
        """
        event = self._event

        while not event.is_set():
            failed = self._first_failure()
            if failed is not None:
                self._reason = f"Task failure: {failed.get_name()}"
                log.error("Critical task failed", task=failed.get_name(), exception=failed.exception())
                return

            self._watched = [t for t in self._watched if not t.done()]
            event_waiter = asyncio.create_task(event.wait())
            try:
                await asyncio.wait({event_waiter, *self._watched}, return_when=asyncio.FIRST_COMPLETED)
            finally:
                event_waiter.cancel()

        log.debug("Shutdown requested", reason=self._reason)

    # ------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------

    async def _run_handler(self, handler: IShutdownHandler) -> None:
        name = type(handler).__name__
        try:
            await asyncio.wait_for(handler.shutdown(), timeout=self.timeout_per_handler)
            log.debug(f"{name} done")
        except asyncio.TimeoutError:
            log.error(f"{name} timed out after {self.timeout_per_handler}s")
        except asyncio.CancelledError:
            log.warn("Shutdown sequence was cancelled")
            raise
        except Exception as e:
            log.error(f"{name} failed", exception=e)

    async def shutdown_all(self) -> None:
        """Run handlers by descending priority; a failing handler does not stop the rest."""
        log.info("Shutting down...", reason=self._reason or "UNKNOWN")

        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.total_timeout

        for handler in sorted(self._handlers, key=lambda h: h.shutdown_priority, reverse=True):
            if loop.time() > deadline:
                log.error(f"Total shutdown timeout ({self.total_timeout}s) exceeded, skipping remaining handlers")
                break
            await self._run_handler(handler)

        log.info("Shutdown sequence complete")
