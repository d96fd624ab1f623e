"""
Shared fixtures: virtual-time scheduler, seeded animator, watch face on a
clock derived from the scheduler's virtual time.
"""

import random
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Add src to path (also set via pytest pythonpath)
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from animations.glitch_text import GlitchAnimator, RANDOM_NUMERIC
from engine.scheduler import ManualScheduler
from models.config import GlitchConfig, WatchFaceConfig
from services.watch_face_service import WatchFaceService

# Friday 2024-06-07 10:00:00
BASE_TIME = datetime(2024, 6, 7, 10, 0, 0)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def animator(scheduler, rng):
    """frames_per_cell=2, 30 ms ticks"""
    return GlitchAnimator(scheduler, frames_per_cell=2, alphabet=RANDOM_NUMERIC, tick_delay_ms=30, rng=rng)


@pytest.fixture
def clock(scheduler):
    """Wall clock that moves with the scheduler's virtual time."""
    def now() -> datetime:
        return BASE_TIME + timedelta(milliseconds=scheduler.now_ms)
    return now


@pytest.fixture
def glitch_config():
    return GlitchConfig(frames_per_cell=3, tick_delay_ms=33, start_delay_ms=33)


@pytest.fixture
def watch_face_config():
    return WatchFaceConfig()


@pytest.fixture
def frames():
    return []


@pytest.fixture
def watch_face(scheduler, rng, clock, glitch_config, watch_face_config, frames):
    animator = GlitchAnimator(
        scheduler,
        frames_per_cell=glitch_config.frames_per_cell,
        alphabet=glitch_config.alphabet,
        tick_delay_ms=glitch_config.tick_delay_ms,
        rng=rng,
    )
    return WatchFaceService(
        config=watch_face_config,
        glitch_config=glitch_config,
        animator=animator,
        scheduler=scheduler,
        clock=clock,
        on_frame=frames.append,
    )
