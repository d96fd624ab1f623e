from .api_server_shutdown_handler import APIServerShutdownHandler
from .task_cancellation_handler import TaskCancellationHandler
from .watch_face_shutdown_handler import WatchFaceShutdownHandler

__all__ = [
    "APIServerShutdownHandler",
    "TaskCancellationHandler",
    "WatchFaceShutdownHandler",
]
