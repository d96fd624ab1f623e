"""
main_asyncio.py - Application entry point for the glitch watch face
------------------------------------------------------------------

Responsible for:
- loading configuration and configuring the logger
- wiring dependencies (scheduler, animator, watch face, API)
- starting the watch face update timer on the asyncio loop
- graceful shutdown on Ctrl +C or fatal errors
"""

import sys

# ---------------------------------------------------------------------------
# UTF-8 ENCODING FIX
# ---------------------------------------------------------------------------

# Logger symbols (✓ ⚠ ✗ ├─) need a UTF-8 stdout
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import asyncio
from typing import List

from api.dependencies import set_service_container
from api.main import create_app
from components.console_face import ConsoleFace
from engine.scheduler import AsyncioScheduler
from lifecycle import APIServerWrapper, ShutdownCoordinator
from lifecycle.handlers import (
    APIServerShutdownHandler,
    TaskCancellationHandler,
    WatchFaceShutdownHandler,
)
from managers import ConfigManager
from models.enums import LogCategory
from services import ServiceContainer
from utils.logger import get_logger, configure_logger

# ---------------------------------------------------------------------------
# LOGGER SETUP
# ---------------------------------------------------------------------------

log = get_logger().for_category(LogCategory.SYSTEM)


async def main():
    log.info("Starting glitch watch face...")

    # ========================================================================
    # 1. CONFIGURATION
    # ========================================================================

    config_manager = ConfigManager()
    config_manager.load()
    configure_logger(config_manager.logging.level, config_manager.logging.use_colors)

    # ========================================================================
    # 2. SERVICES
    # ========================================================================

    loop = asyncio.get_running_loop()
    scheduler = AsyncioScheduler(loop)
    console_face = ConsoleFace()

    services = ServiceContainer.build(
        config_manager,
        scheduler,
        on_frame=console_face,
    )

    set_service_container(services)
    log.info("Service container registered with API")

    services.watch_face.start()

    # ========================================================================
    # 3. API SERVER
    # ========================================================================

    background_tasks: List[asyncio.Task] = []
    api_wrapper = None

    if config_manager.api.enabled:
        log.info("Starting API server task...")
        api_wrapper = APIServerWrapper(
            create_app(),
            host=config_manager.api.host,
            port=config_manager.api.port,
        )
        api_task = asyncio.create_task(api_wrapper.start(), name="APIServer")
        background_tasks.append(api_task)
    else:
        log.info("API server disabled in config")

    # ========================================================================
    # 4. SHUTDOWN COORDINATOR
    # ========================================================================

    coordinator = ShutdownCoordinator()

    coordinator.register(WatchFaceShutdownHandler(services.watch_face))
    if api_wrapper is not None:
        coordinator.register(APIServerShutdownHandler(api_wrapper))
    coordinator.register(TaskCancellationHandler(background_tasks))

    for task in background_tasks:
        coordinator.watch(task)

    coordinator.setup_signal_handlers(loop)

    log.info("🏁 Watch face running. Waiting for exit signal...")

    await coordinator.wait_for_shutdown()

    console_face.clear()
    await coordinator.shutdown_all()
    set_service_container(None)
    log.info("👋 Watch face shut down cleanly.")


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------

def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
    except Exception as e:
        log.error("Fatal error", exception=e)
        sys.exit(1)


if __name__ == "__main__":
    run()
