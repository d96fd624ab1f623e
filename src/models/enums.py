"""
Enums for the glitch watch face
"""

from enum import Enum, auto


class AnimationPhase(Enum):
    """
    GlitchAnimator states

    IDLE: No run in progress (initial state, after completion or stop)
    ANIMATING: Text is being resolved tick by tick
    """
    IDLE = auto()
    ANIMATING = auto()


class DisplayMode(Enum):
    """Watch face display modes"""
    INTERACTIVE = auto()   # Full HH:MM:SS face, animations allowed
    AMBIENT = auto()       # Low-power HH:MM face, no animations


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    ANIMATION = auto()   # Glitch animator start/stop/complete
    SCHEDULER = auto()   # Timer arming and cancellation
    WATCHFACE = auto()   # Draw loop, mode changes, trigger decisions
    SYSTEM = auto()      # Startup, errors

    API = auto()
    SHUTDOWN = auto()
