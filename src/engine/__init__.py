"""
Timing engine - schedulers driving the animator and the watch face timer
"""

from .scheduler import AsyncioScheduler, Cancellable, ManualScheduler, ManualTimer, Scheduler

__all__ = [
    'AsyncioScheduler',
    'Cancellable',
    'ManualScheduler',
    'ManualTimer',
    'Scheduler',
]
