"""
Watch face endpoints - state preview and glitch animation control

The face keeps running on its own update timer; these endpoints only read
the latest state or nudge it (start/stop a run, switch ambient mode).
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_service_container
from api.middleware.error_handler import AnimationNotAllowedError
from api.schemas.watchface import (
    AnimationStartRequest,
    AnimationStateResponse,
    AnimationStatusResponse,
    ModeUpdateRequest,
    WatchFaceStateResponse,
)
from services.service_container import ServiceContainer
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)

router = APIRouter(prefix="/watchface", tags=["Watch face"])


def _state_response(services: ServiceContainer) -> WatchFaceStateResponse:
    watch_face = services.watch_face
    frame = watch_face.compose_frame()
    snapshot = services.animator.snapshot()

    return WatchFaceStateResponse(
        mode=frame.mode.name,
        visible=watch_face.visible,
        time_text=frame.time_text,
        date_text=frame.date_text,
        display_text=frame.display_text,
        animating=frame.animating,
        animation=AnimationStateResponse(
            phase=snapshot.phase.name,
            target=snapshot.target,
            visible=snapshot.visible,
            revealed_count=snapshot.revealed_count,
            frame_in_cell=snapshot.frame_in_cell,
            frames_per_cell=services.animator.frames_per_cell,
        ),
    )


def _status_response(services: ServiceContainer, started: bool = False) -> AnimationStatusResponse:
    return AnimationStatusResponse(
        started=started,
        running=services.animator.is_running(),
        text=services.animator.current_text(),
    )


@router.get(
    "",
    response_model=WatchFaceStateResponse,
    summary="Get watch face state",
    description="Current frame (time, date, displayed text) and glitch animator state"
)
async def get_watch_face(
    services: ServiceContainer = Depends(get_service_container)
) -> WatchFaceStateResponse:
    return _state_response(services)


@router.post(
    "/animation/start",
    response_model=AnimationStatusResponse,
    summary="Start glitch animation",
    description="Start a glitch reveal of the given text (default: current time)"
)
async def start_animation(
    request: AnimationStartRequest,
    services: ServiceContainer = Depends(get_service_container)
) -> AnimationStatusResponse:
    """
    Start a glitch run.

    **Behaviour:**
    - Ignored (started=false) while a run is already active; stop it first
    - 409 ANIMATION_NOT_ALLOWED in ambient mode
    """
    watch_face = services.watch_face
    if watch_face.ambient:
        raise AnimationNotAllowedError(watch_face.mode.name)

    started = watch_face.trigger_animation(request.target, request.tick_delay_ms)
    log.info("Animation start requested", started=started, target=request.target)
    return _status_response(services, started)


@router.post(
    "/animation/stop",
    response_model=AnimationStatusResponse,
    summary="Stop glitch animation",
    description="Cancel the running glitch run (no-op when idle)"
)
async def stop_animation(
    services: ServiceContainer = Depends(get_service_container)
) -> AnimationStatusResponse:
    services.watch_face.stop_animation()
    log.info("Animation stop requested")
    return _status_response(services)


@router.put(
    "/mode",
    response_model=WatchFaceStateResponse,
    summary="Set display mode",
    description="Enter/leave ambient mode and show/hide the face"
)
async def update_mode(
    request: ModeUpdateRequest,
    services: ServiceContainer = Depends(get_service_container)
) -> WatchFaceStateResponse:
    watch_face = services.watch_face
    if request.ambient is not None:
        watch_face.set_ambient(request.ambient)
    if request.visible is not None:
        watch_face.set_visible(request.visible)
    return _state_response(services)
