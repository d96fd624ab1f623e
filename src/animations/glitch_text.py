"""
Glitch Text Animation

Resolves a target string (usually the clock time) left to right out of
random placeholder symbols.

For edit position x (frames_per_cell = 3):
    Frame 1 - random symbol at x
    Frame 2 - another random symbol at x
    Frame 3 - target[x] at x, position locks in, x advances

Once every character is locked the full target is held for one more cell of
frames, then the run completes and the one-shot callback fires. A target of
length L therefore takes exactly (L + 1) * frames_per_cell ticks.
"""

import random
from typing import Callable, Optional

from engine.scheduler import Cancellable, Scheduler
from models.animation_state import AnimationState
from models.enums import AnimationPhase
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.ANIMATION)

RANDOM_NUMERIC = "1234567890:"
DEFAULT_FRAMES_PER_CELL = 3
DEFAULT_TICK_DELAY_MS = 1000 // 30


class GlitchAnimator:
    """
    Timed state machine behind the glitch text reveal.

    The animator never waits on its own: start() arms the first tick through
    the injected scheduler and every advance() re-arms the next one until the
    run completes or stop() is called.

    States:
        IDLE --start()--> ANIMATING --last tick--> IDLE (on_complete fires)
        ANIMATING --stop()--> IDLE (no callback)

    start() while ANIMATING is ignored; callers wanting to interrupt a run
    must call stop() first.

    Example:
        animator = GlitchAnimator(AsyncioScheduler())
        animator.start("10:42:07", on_complete=lambda: print("done"))
        ...
        if animator.is_running():
            draw(animator.current_text())
    """

    def __init__(
        self,
        scheduler: Scheduler,
        frames_per_cell: int = DEFAULT_FRAMES_PER_CELL,
        alphabet: str = RANDOM_NUMERIC,
        tick_delay_ms: float = DEFAULT_TICK_DELAY_MS,
        rng: Optional[random.Random] = None,
    ):
        if frames_per_cell < 1:
            raise ValueError(f"frames_per_cell must be >= 1, got {frames_per_cell}")
        if not alphabet:
            raise ValueError("Glitch alphabet must not be empty")
        if tick_delay_ms <= 0:
            raise ValueError(f"tick_delay_ms must be > 0, got {tick_delay_ms}")

        self._scheduler = scheduler
        self._frames_per_cell = frames_per_cell
        self._alphabet = alphabet
        self._tick_delay_ms = tick_delay_ms
        self._rng = rng or random.Random()

        self._state = AnimationState()
        self._run_tick_delay_ms = tick_delay_ms
        self._pending: Optional[Cancellable] = None
        # Bumped on every start/stop so a stray tick from an old run is ignored
        self._run_id = 0

    # ------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------

    @property
    def frames_per_cell(self) -> int:
        return self._frames_per_cell

    @property
    def alphabet(self) -> str:
        return self._alphabet

    @property
    def tick_delay_ms(self) -> float:
        """Default delay between ticks (used when start() gets none)"""
        return self._tick_delay_ms

    @property
    def run_tick_delay_ms(self) -> float:
        """Delay between ticks of the current (or last) run"""
        return self._run_tick_delay_ms

    # ------------------------------------------------------------
    # Control
    # ------------------------------------------------------------

    def start(
        self,
        target: str,
        tick_delay_ms: Optional[float] = None,
        on_complete: Optional[Callable[[], None]] = None,
        start_delay_ms: Optional[float] = None,
    ) -> bool:
        """
        Begin revealing target.

        Args:
            target: Text to resolve (e.g. "10:42:07")
            tick_delay_ms: Delay between ticks for this run (default: constructor value)
            on_complete: Called once when the run finishes (never after stop())
            start_delay_ms: Delay before the first tick (default: tick_delay_ms)

        Returns:
            True if a run was started, False if one was already in progress
        """
        if self._state.running:
            log.debug("Start ignored, animation already running",
                      running_target=self._state.target, requested=target)
            return False

        delay = self._tick_delay_ms if tick_delay_ms is None else tick_delay_ms
        if delay <= 0:
            raise ValueError(f"tick_delay_ms must be > 0, got {delay}")
        first_delay = delay if start_delay_ms is None else start_delay_ms

        self._cancel_pending()
        self._run_id += 1
        self._run_tick_delay_ms = delay
        self._state = AnimationState(
            target=target,
            revealed_count=0,
            frame_in_cell=1,
            visible="",
            running=True,
            on_complete=on_complete,
        )
        self._arm(first_delay)

        log.debug("Glitch animation started", target=repr(target),
                  frames_per_cell=self._frames_per_cell, tick_delay_ms=delay)
        return True

    def stop(self) -> None:
        """Cancel the run (if any). The completion callback will not fire."""
        if not self._state.running:
            return

        self._cancel_pending()
        self._run_id += 1
        self._state.running = False
        self._state.on_complete = None
        log.debug("Glitch animation stopped", visible=repr(self._state.visible))

    def advance(self) -> None:
        """Run one tick of the reveal. No-op when idle."""
        state = self._state
        if not state.running:
            return

        target = state.target
        if not target:
            # Nothing to reveal: the run settles on its first tick
            state.visible = ""
            self._finish()
            return

        index = state.revealed_count
        if index < len(target):
            if state.frame_in_cell < self._frames_per_cell:
                edit_char = self._rng.choice(self._alphabet)
            else:
                edit_char = target[index]
            state.visible = target[:index] + edit_char
        else:
            state.visible = target

        if state.frame_in_cell == self._frames_per_cell:
            state.frame_in_cell = 1
            state.revealed_count += 1
        else:
            state.frame_in_cell += 1

        if state.revealed_count > len(target):
            self._finish()
        else:
            self._arm(self._run_tick_delay_ms)

    # ------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------

    def is_running(self) -> bool:
        return self._state.running

    def current_text(self) -> str:
        return self._state.visible

    @property
    def phase(self) -> AnimationPhase:
        return self._state.phase

    @property
    def has_pending_tick(self) -> bool:
        return self._pending is not None and not self._pending.cancelled()

    def snapshot(self) -> AnimationState:
        """Copy of the current state (without the callback)."""
        return self._state.copy()

    # ------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------

    def _arm(self, delay_ms: float) -> None:
        self._cancel_pending()
        run_id = self._run_id
        self._pending = self._scheduler.schedule(delay_ms, lambda: self._on_tick(run_id))

    def _on_tick(self, run_id: int) -> None:
        if run_id != self._run_id:
            log.debug("Dropping tick from a finished run", run_id=run_id, current=self._run_id)
            return
        self._pending = None
        self.advance()

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _finish(self) -> None:
        state = self._state
        state.running = False
        callback = state.on_complete
        state.on_complete = None
        # advance() may be called directly while a tick is still armed
        self._cancel_pending()

        log.debug("Glitch animation complete", target=repr(state.target))

        if callback is not None:
            callback()
