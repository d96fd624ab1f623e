"""
Watch face schemas - Pydantic models for watch face requests/responses
"""

from pydantic import BaseModel, Field
from typing import Optional


class AnimationStateResponse(BaseModel):
    """Snapshot of the glitch animator"""
    phase: str = Field(description="IDLE or ANIMATING")
    target: str = Field(description="Text being revealed (last run's target when idle)")
    visible: str = Field(description="Currently visible partial text")
    revealed_count: int = Field(description="Leading characters already locked in")
    frame_in_cell: int = Field(description="Sub-step counter for the edit position")
    frames_per_cell: int = Field(description="Ticks spent on each character")


class WatchFaceStateResponse(BaseModel):
    """Current watch face frame plus animator state"""
    mode: str = Field(description="INTERACTIVE or AMBIENT")
    visible: bool = Field(description="Whether the face is on screen")
    time_text: str = Field(description="Plain time string (HH:MM:SS or HH:MM)")
    date_text: str = Field(description="Weekday and day of month, e.g. 'FRI 7'")
    display_text: str = Field(description="Text the renderer should draw")
    animating: bool = Field(description="Whether display_text comes from the animator")
    animation: AnimationStateResponse

    class Config:
        json_schema_extra = {
            "example": {
                "mode": "INTERACTIVE",
                "visible": True,
                "time_text": "10:42:09",
                "date_text": "MON 19",
                "display_text": "10:4",
                "animating": True,
                "animation": {
                    "phase": "ANIMATING",
                    "target": "10:42:09",
                    "visible": "10:4",
                    "revealed_count": 3,
                    "frame_in_cell": 2,
                    "frames_per_cell": 3
                }
            }
        }


class AnimationStartRequest(BaseModel):
    """Request to start a glitch run"""
    target: Optional[str] = Field(
        None,
        max_length=64,
        description="Text to reveal (default: current time string)"
    )
    tick_delay_ms: Optional[int] = Field(
        None,
        gt=0,
        le=10_000,
        description="Delay between ticks (default: configured tick delay)"
    )

    class Config:
        json_schema_extra = {
            "examples": [
                {},
                {"target": "12:00", "tick_delay_ms": 30}
            ]
        }


class AnimationStatusResponse(BaseModel):
    """Result of a start/stop request"""
    started: bool = Field(False, description="True if this request started a new run")
    running: bool = Field(description="Whether a run is in progress after the request")
    text: str = Field(description="Animator's current visible text")


class ModeUpdateRequest(BaseModel):
    """Change display mode and/or visibility"""
    ambient: Optional[bool] = Field(None, description="Enter (true) or leave (false) ambient mode")
    visible: Optional[bool] = Field(None, description="Show or hide the face")
