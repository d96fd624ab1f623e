"""Watch face frame model"""

from dataclasses import dataclass

from models.enums import DisplayMode


@dataclass(frozen=True)
class WatchFaceFrame:
    """
    Everything the renderer needs for one redraw.

    display_text is what goes on screen: the animator's partial text while a
    glitch run is active in interactive mode, otherwise the plain time_text.
    """
    time_text: str
    date_text: str
    display_text: str
    animating: bool
    mode: DisplayMode

    @property
    def ambient(self) -> bool:
        return self.mode == DisplayMode.AMBIENT
