"""
Text animations for the watch face

Current implementation:
- glitch_text: GlitchAnimator, left-to-right glitch reveal of the time string
"""

from .glitch_text import GlitchAnimator, RANDOM_NUMERIC, DEFAULT_FRAMES_PER_CELL, DEFAULT_TICK_DELAY_MS

__all__ = [
    "GlitchAnimator",
    "RANDOM_NUMERIC",
    "DEFAULT_FRAMES_PER_CELL",
    "DEFAULT_TICK_DELAY_MS",
]
