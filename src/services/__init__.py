"""Services layer"""

from .watch_face_service import WatchFaceService
from .service_container import ServiceContainer

__all__ = [
    "WatchFaceService",
    "ServiceContainer",
]
