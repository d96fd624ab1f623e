from __future__ import annotations
import asyncio
from typing import List

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class TaskCancellationHandler(IShutdownHandler):
    """
    Cancels and awaits the given background tasks.

    Priority: 40
    """

    def __init__(self, tasks: List[asyncio.Task]):
        self.tasks = tasks

    @property
    def shutdown_priority(self) -> int:
        """Tasks are cancelled after the services that use them."""
        return 40

    async def shutdown(self) -> None:
        log.info("Cancelling background tasks...")

        for task in self.tasks:
            if not task.done():
                task.cancel()
                log.debug(f"Cancelled task: {task.get_name()}")

        # Either complete or raise CancelledError
        if self.tasks:
            await asyncio.gather(*self.tasks, return_exceptions=True)

        log.debug("All tasks cancelled")
