"""
Models package - Data models for the glitch watch face
"""

from .enums import AnimationPhase, DisplayMode, LogLevel, LogCategory
from .animation_state import AnimationState
from .frame import WatchFaceFrame

__all__ = [
    'AnimationPhase',
    'DisplayMode',
    'LogLevel',
    'LogCategory',
    'AnimationState',
    'WatchFaceFrame',
]
