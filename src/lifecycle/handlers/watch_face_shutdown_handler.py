from __future__ import annotations
from typing import TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from services.watch_face_service import WatchFaceService

log = get_logger().for_category(LogCategory.SHUTDOWN)


class WatchFaceShutdownHandler(IShutdownHandler):
    """
    Stops the watch face update timer and any running glitch animation.

    Priority: 130 (first, so no tick fires into a half torn down API)
    """

    def __init__(self, watch_face: "WatchFaceService"):
        self.watch_face = watch_face

    @property
    def shutdown_priority(self) -> int:
        return 130

    async def shutdown(self) -> None:
        log.info("Stopping watch face...")
        self.watch_face.shutdown()
