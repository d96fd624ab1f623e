"""Service Container - Dependency injection container for the watch face services"""

from dataclasses import dataclass

from animations.glitch_text import GlitchAnimator
from engine.scheduler import Scheduler
from managers.config_manager import ConfigManager
from services.watch_face_service import WatchFaceService


@dataclass
class ServiceContainer:
    """
    Centralized container for everything the API and the entry point share.

    Usage:
        services = ServiceContainer(
            config_manager=config_manager,
            scheduler=scheduler,
            animator=animator,
            watch_face=watch_face,
        )
        set_service_container(services)

        # API endpoints
        @router.get("/watchface")
        async def get_state(services: ServiceContainer = Depends(get_service_container)):
            return services.watch_face.last_frame
    """

    config_manager: ConfigManager
    scheduler: Scheduler
    animator: GlitchAnimator
    watch_face: WatchFaceService

    @classmethod
    def build(cls, config_manager: ConfigManager, scheduler: Scheduler, **watch_face_kwargs) -> "ServiceContainer":
        """Wire animator and watch face from a loaded ConfigManager."""
        glitch = config_manager.glitch
        animator = GlitchAnimator(
            scheduler,
            frames_per_cell=glitch.frames_per_cell,
            alphabet=glitch.alphabet,
            tick_delay_ms=glitch.tick_delay_ms,
        )
        watch_face = WatchFaceService(
            config=config_manager.watch_face,
            glitch_config=glitch,
            animator=animator,
            scheduler=scheduler,
            **watch_face_kwargs,
        )
        return cls(
            config_manager=config_manager,
            scheduler=scheduler,
            animator=animator,
            watch_face=watch_face,
        )
