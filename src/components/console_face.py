"""
Console Face Component - terminal stand-in for the watch display

Renders each WatchFaceFrame as a single rewritten terminal line:

    [INTERACTIVE] 14:23:4█  FRI 7

Frames identical to the previous one are skipped so the line only changes
when something visible changes.
"""

import sys
from typing import Optional, TextIO

from models.frame import WatchFaceFrame


class ConsoleFace:
    """
    Callable renderer for WatchFaceService(on_frame=...).

    Args:
        stream: Output stream (default: sys.stdout)
        width: Pad the display text to this many characters
    """

    def __init__(self, stream: Optional[TextIO] = None, width: int = 8):
        self.stream = stream or sys.stdout
        self.width = width
        self._last_line: Optional[str] = None
        self.frames_rendered = 0

    def format(self, frame: WatchFaceFrame) -> str:
        return f"[{frame.mode.name}] {frame.display_text.ljust(self.width)}  {frame.date_text}"

    def __call__(self, frame: WatchFaceFrame) -> None:
        line = self.format(frame)
        if line == self._last_line:
            return
        self._last_line = line
        self.frames_rendered += 1
        self.stream.write(f"\r{line}")
        self.stream.flush()

    def clear(self) -> None:
        if self._last_line is not None:
            self.stream.write("\n")
            self.stream.flush()
            self._last_line = None
