from __future__ import annotations
from typing import TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from lifecycle.api_server_wrapper import APIServerWrapper

log = get_logger().for_category(LogCategory.SHUTDOWN)


class APIServerShutdownHandler(IShutdownHandler):
    """
    Shutdown handler for the control API (FastAPI + Uvicorn).

    Uses APIServerWrapper for a clean stop with force_exit set, so the
    uvicorn lifespan task cannot keep the port open.

    Priority: 90 (after the watch face, before task cancellation)
    """

    def __init__(self, api_wrapper: "APIServerWrapper"):
        """
        Args:
            api_wrapper: APIServerWrapper instance managing the API server
        """
        self.api_wrapper = api_wrapper

    @property
    def shutdown_priority(self) -> int:
        return 90

    async def shutdown(self) -> None:
        log.info("Stopping API server...")

        if not self.api_wrapper.is_running:
            log.debug("API server not running")
            return

        try:
            await self.api_wrapper.stop()
        except Exception as e:
            log.error("Error stopping API server", exception=e)
