"""
Animation state model for the glitch text animator
"""

from dataclasses import dataclass, replace
from typing import Callable, Optional

from models.enums import AnimationPhase


@dataclass
class AnimationState:
    """
    Mutable state of one glitch text-reveal run.

    Owned exclusively by GlitchAnimator and reset on every accepted start().

    Attributes:
        target: Final text to reveal (fixed for the run)
        revealed_count: Leading characters of target already locked in
        frame_in_cell: Sub-step counter in [1, frames_per_cell]
        visible: Text currently shown to the renderer
        running: Whether a run is in progress
        on_complete: One-shot completion callback for the current run
    """
    target: str = ""
    revealed_count: int = 0
    frame_in_cell: int = 1
    visible: str = ""
    running: bool = False
    on_complete: Optional[Callable[[], None]] = None

    @property
    def phase(self) -> AnimationPhase:
        return AnimationPhase.ANIMATING if self.running else AnimationPhase.IDLE

    def copy(self) -> "AnimationState":
        """Independent copy without the callback (safe to hand out)."""
        return replace(self, on_complete=None)
