"""Watch face service - draw loop and glitch trigger policy"""

from datetime import datetime
from typing import Callable, Optional

from animations.glitch_text import GlitchAnimator
from engine.scheduler import Cancellable, Scheduler
from models.config import GlitchConfig, WatchFaceConfig
from models.enums import DisplayMode
from models.frame import WatchFaceFrame
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.WATCHFACE)


class WatchFaceService:
    """
    Host side of the glitch animator.

    Responsibilities:
    - format the time/date strings for the current mode
    - decide when the glitch animation (re)starts
    - pick animated or plain text for each frame
    - keep a self re-arming update timer while visible and interactive

    Trigger policy (interactive mode only):
    - second % trigger_second_modulo == trigger_second AND
      cooldown_ms elapsed since the last completed run, OR
    - a forced start is pending (armed when entering ambient mode, so the
      face glitches back in when leaving it)

    The clock is the single time source: completion timestamps and timer
    alignment are both derived from it.
    """

    def __init__(
        self,
        config: WatchFaceConfig,
        glitch_config: GlitchConfig,
        animator: GlitchAnimator,
        scheduler: Scheduler,
        clock: Callable[[], datetime] = datetime.now,
        on_frame: Optional[Callable[[WatchFaceFrame], None]] = None,
    ):
        self.config = config
        self.glitch_config = glitch_config
        self.animator = animator
        self._scheduler = scheduler
        self._clock = clock
        self._on_frame = on_frame

        self._ambient = False
        self._visible = True
        self._force_start = False
        self._last_completion_ms = 0.0
        self._timer: Optional[Cancellable] = None
        self.last_frame: Optional[WatchFaceFrame] = None

    # ------------------------------------------------------------
    # State
    # ------------------------------------------------------------

    @property
    def ambient(self) -> bool:
        return self._ambient

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def mode(self) -> DisplayMode:
        return DisplayMode.AMBIENT if self._ambient else DisplayMode.INTERACTIVE

    @property
    def force_start_pending(self) -> bool:
        return self._force_start

    @property
    def last_completion_ms(self) -> float:
        return self._last_completion_ms

    @property
    def timer_running(self) -> bool:
        return self._timer is not None and not self._timer.cancelled()

    def now(self) -> datetime:
        return self._clock()

    def _now_ms(self) -> int:
        return round(self._clock().timestamp() * 1000)

    # ------------------------------------------------------------
    # Text
    # ------------------------------------------------------------

    def time_text(self, now: datetime) -> str:
        """HH:MM in ambient mode, HH:MM:SS in interactive mode"""
        if self._ambient:
            return f"{now.hour:02d}:{now.minute:02d}"
        return f"{now.hour:02d}:{now.minute:02d}:{now.second:02d}"

    @staticmethod
    def date_text(now: datetime) -> str:
        """Abbreviated weekday and day of month, e.g. "FRI 7" """
        return f"{now.strftime('%a').upper()} {now.day}"

    # ------------------------------------------------------------
    # Trigger policy
    # ------------------------------------------------------------

    def can_trigger(self, now: datetime) -> bool:
        on_boundary = now.second % self.config.trigger_second_modulo == self.config.trigger_second
        if not on_boundary:
            return False
        return now.timestamp() * 1000 - self._last_completion_ms >= self.config.cooldown_ms

    def _start_animation(self, target: str, tick_delay_ms: Optional[float] = None) -> bool:
        started = self.animator.start(
            target,
            tick_delay_ms=tick_delay_ms or self.glitch_config.tick_delay_ms,
            on_complete=self._on_animation_complete,
            start_delay_ms=self.glitch_config.start_delay_ms,
        )
        if started:
            log.info("Glitch animation triggered", target=target)
            # Animation frames need the faster redraw rate right away
            if self.timer_running:
                self.update_timer()
        return started

    def _on_animation_complete(self) -> None:
        self._last_completion_ms = self._now_ms()
        log.debug("Glitch animation finished", completed_at_ms=int(self._last_completion_ms))

    def trigger_animation(self, target: Optional[str] = None, tick_delay_ms: Optional[float] = None) -> bool:
        """
        Start a glitch run on demand (API, tests).

        Returns:
            True if a run started; False in ambient mode or while a run is active
        """
        if self._ambient:
            log.warn("Animation request ignored in ambient mode")
            return False
        if target is None:
            target = self.time_text(self.now())
        return self._start_animation(target, tick_delay_ms)

    def stop_animation(self) -> None:
        self.animator.stop()

    # ------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------

    def draw(self, now: Optional[datetime] = None) -> WatchFaceFrame:
        """Build the frame for now and hand it to the renderer hook."""
        now = now or self.now()
        time_text = self.time_text(now)

        if not self._ambient and (self._force_start or self.can_trigger(now)):
            self._force_start = False
            self._start_animation(time_text)

        frame = self.compose_frame(now)
        self.last_frame = frame

        if self._on_frame is not None:
            self._on_frame(frame)
        return frame

    def compose_frame(self, now: Optional[datetime] = None) -> WatchFaceFrame:
        """Frame for now without running the trigger policy (read-only)."""
        now = now or self.now()
        time_text = self.time_text(now)

        animating = not self._ambient and self.animator.is_running()
        display_text = self.animator.current_text() if animating else time_text

        return WatchFaceFrame(
            time_text=time_text,
            date_text=self.date_text(now),
            display_text=display_text,
            animating=animating,
            mode=self.mode,
        )

    # ------------------------------------------------------------
    # Mode / visibility
    # ------------------------------------------------------------

    def set_ambient(self, ambient: bool) -> None:
        if ambient == self._ambient:
            return

        self._ambient = ambient
        # No animations in ambient mode; a fresh run is forced on the way back
        self.animator.stop()
        if ambient:
            self._force_start = True

        log.info("Display mode changed", mode=self.mode.name)
        self.update_timer()

    def set_visible(self, visible: bool) -> None:
        if visible == self._visible:
            return
        self._visible = visible
        log.debug("Visibility changed", visible=visible)
        self.update_timer()

    # ------------------------------------------------------------
    # Update timer
    # ------------------------------------------------------------

    def should_timer_run(self) -> bool:
        return self._visible and not self._ambient

    def start(self) -> None:
        """Start the update timer (if visible and interactive)."""
        self.update_timer()

    def update_timer(self) -> None:
        """Cancel the update timer and re-arm it immediately if it should run."""
        self._cancel_timer()
        if self.should_timer_run():
            self._timer = self._scheduler.schedule(0, self._on_timer)

    def _on_timer(self) -> None:
        self._timer = None
        self.draw()

        if self.should_timer_run():
            if self.animator.is_running():
                rate = self.animator.run_tick_delay_ms
            else:
                rate = self.config.interactive_update_ms
            # Align redraws to rate boundaries of the clock
            delay = rate - (self._now_ms() % rate)
            self._timer = self._scheduler.schedule(delay, self._on_timer)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def shutdown(self) -> None:
        """Stop the update timer and any running animation."""
        self._cancel_timer()
        self.animator.stop()
        log.info("Watch face stopped")
