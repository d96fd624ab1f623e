"""
Lifecycle subsystem
-------------------

Exports the public API for:
- graceful shutdown
- shutdown handlers
- running the API server inside the event loop

External code should import from:
    from lifecycle import ShutdownCoordinator
    from lifecycle.handlers import WatchFaceShutdownHandler
"""

from .shutdown_coordinator import ShutdownCoordinator
from .shutdown_protocol import IShutdownHandler
from .api_server_wrapper import APIServerWrapper
from . import handlers

__all__ = [
    "ShutdownCoordinator",
    "IShutdownHandler",
    "APIServerWrapper",
    "handlers",
]
