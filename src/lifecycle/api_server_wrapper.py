from __future__ import annotations
import asyncio
import uvicorn
from fastapi import FastAPI
from typing import Optional
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)


class APIServerWrapper:
    """
    Runs Uvicorn inside an asyncio task with its own signal handlers disabled,
    so Ctrl+C goes through the ShutdownCoordinator.

    Behaviour:
      - start() launches uvicorn.Server.serve() as a background task and
        blocks until stop() is called.
      - stop() unblocks start(), asks the server to shut down and forces the
        serve task out if it does not finish in time.
    """

    def __init__(
        self,
        app: FastAPI,
        host: str = "0.0.0.0",
        port: int = 8000,
        log_level: str = "warning",
    ):
        self.app = app
        self.host = host
        self.port = port
        self.log_level = log_level
        self._server: Optional[uvicorn.Server] = None
        self._serve_task: Optional[asyncio.Task] = None
        self._stop_event: asyncio.Event = asyncio.Event()

    # ----------------------------------------------------------------------
    # INTERNAL
    # ----------------------------------------------------------------------
    def _create_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            app=self.app,
            host=self.host,
            port=self.port,
            loop="asyncio",
            log_level=self.log_level,
            access_log=False,
            server_header=False,
        )

        server = uvicorn.Server(config)

        # Shutdown is driven by the coordinator, not by uvicorn
        server.install_signal_handlers = lambda: None  # type: ignore

        return server

    async def _wait_started(self, timeout: float) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while loop.time() < deadline:
            if getattr(self._server, "started", False):
                log.info(f"API server listening on http://{self.host}:{self.port}")
                return
            if self._serve_task is not None and self._serve_task.done():
                # Bind failure etc.; surfaced by the coordinator watching the task
                return
            await asyncio.sleep(0.05)
        log.warn(f"API server did not report started within {timeout}s")

    # ----------------------------------------------------------------------
    # PUBLIC API
    # ----------------------------------------------------------------------
    async def start(self, *, wait_started_timeout: float = 5.0) -> None:
        """
        Start uvicorn in the background and wait until stop() is called.

        Schedule start() as a task for non-blocking use. If uvicorn itself
        fails (e.g. the port is taken) the failure is re-raised here.
        """
        if self._serve_task is not None and not self._serve_task.done():
            raise RuntimeError("API server already started")

        self._server = self._create_server()
        self._stop_event.clear()

        log.info(f"Launching API server on http://{self.host}:{self.port}")

        self._serve_task = asyncio.create_task(
            self._server.serve(), name="UvicornServe"
        )
        await self._wait_started(wait_started_timeout)

        stop_waiter = asyncio.create_task(self._stop_event.wait())
        try:
            await asyncio.wait(
                {self._serve_task, stop_waiter},
                return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            log.debug("start() cancelled externally, invoking stop()")
            await self.stop()
            raise
        finally:
            if not stop_waiter.done():
                stop_waiter.cancel()

        serve_task = self._serve_task
        if serve_task is not None and serve_task.done() and not self._stop_event.is_set():
            self._server = None
            self._serve_task = None
            if serve_task.exception() is not None:
                raise serve_task.exception()
            # uvicorn exits serve() without raising when it cannot bind
            raise RuntimeError(f"API server exited unexpectedly (port {self.port})")

        log.debug("APIServerWrapper.start() exiting (stop requested)")

    async def stop(self, *, shutdown_timeout: float = 2.0) -> None:
        """
        Stop the API server and release the port.

        Steps:
          1. set stop_event so start() unblocks
          2. set server.should_exit / force_exit
          3. wait for the serve task, cancelling it after shutdown_timeout
        """
        self._stop_event.set()

        if self._server is None or self._serve_task is None:
            log.debug("API server stop() called but server was not running")
            return

        log.info("Stopping API server...")

        self._server.should_exit = True
        self._server.force_exit = True

        try:
            await asyncio.wait_for(asyncio.shield(self._serve_task), timeout=shutdown_timeout)
            log.debug("Uvicorn serve task finished")
        except asyncio.TimeoutError:
            log.warn("API server shutdown timeout; cancelling serve task")
            self._serve_task.cancel()
            await asyncio.gather(self._serve_task, return_exceptions=True)
        except Exception as e:
            log.error(f"Error during API server shutdown: {e}")

        self._server = None
        self._serve_task = None

        log.info("API server stopped and port released")

    # ----------------------------------------------------------------------
    # PROPERTIES
    # ----------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        """Return whether a uvicorn serve task is active."""
        return self._serve_task is not None and not self._serve_task.done()

    @property
    def task(self) -> Optional[asyncio.Task]:
        return self._serve_task

    @property
    def server(self) -> Optional[uvicorn.Server]:
        return self._server
