"""
Tests for ShutdownCoordinator and the watch face shutdown handlers.
"""

import asyncio

import pytest

from lifecycle.handlers import TaskCancellationHandler, WatchFaceShutdownHandler
from lifecycle.shutdown_coordinator import ShutdownCoordinator


class RecordingHandler:
    def __init__(self, name, priority, calls, error=None, delay=0.0):
        self.name = name
        self._priority = priority
        self.calls = calls
        self.error = error
        self.delay = delay

    @property
    def shutdown_priority(self) -> int:
        return self._priority

    async def shutdown(self) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        self.calls.append(self.name)
        if self.error:
            raise self.error


class TestShutdownSequence:

    @pytest.mark.asyncio
    async def test_handlers_run_by_descending_priority(self):
        calls = []
        coordinator = ShutdownCoordinator()
        coordinator.register(RecordingHandler("api", 90, calls))
        coordinator.register(RecordingHandler("face", 130, calls))
        coordinator.register(RecordingHandler("tasks", 40, calls))

        await coordinator.shutdown_all()

        assert calls == ["face", "api", "tasks"]

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_stop_sequence(self):
        calls = []
        coordinator = ShutdownCoordinator()
        coordinator.register(RecordingHandler("broken", 100, calls, error=RuntimeError("boom")))
        coordinator.register(RecordingHandler("after", 10, calls))

        await coordinator.shutdown_all()

        assert calls == ["broken", "after"]

    @pytest.mark.asyncio
    async def test_slow_handler_times_out(self):
        calls = []
        coordinator = ShutdownCoordinator(timeout_per_handler=0.05)
        coordinator.register(RecordingHandler("slow", 100, calls, delay=1.0))
        coordinator.register(RecordingHandler("fast", 10, calls))

        await coordinator.shutdown_all()

        assert calls == ["fast"]

    def test_register_rejects_incomplete_handler(self):
        coordinator = ShutdownCoordinator()
        with pytest.raises(ValueError):
            coordinator.register(object())

    def test_get_handler(self):
        coordinator = ShutdownCoordinator()
        handler = TaskCancellationHandler([])
        coordinator.register(handler)

        assert coordinator.get_handler(TaskCancellationHandler) is handler
        assert coordinator.get_handler(WatchFaceShutdownHandler) is None


class TestWaitForShutdown:

    @pytest.mark.asyncio
    async def test_returns_on_request(self):
        coordinator = ShutdownCoordinator()

        async def trigger():
            await asyncio.sleep(0.01)
            coordinator.request_shutdown("SIGTERM")

        asyncio.create_task(trigger())
        await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=1.0)

        assert coordinator.shutdown_reason == "SIGTERM"

    @pytest.mark.asyncio
    async def test_returns_when_watched_task_fails(self):
        coordinator = ShutdownCoordinator()

        async def crash():
            await asyncio.sleep(0.01)
            raise RuntimeError("port in use")

        task = asyncio.create_task(crash(), name="APIServer")
        coordinator.watch(task)

        await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=1.0)

        assert coordinator.shutdown_reason == "Task failure: APIServer"

    @pytest.mark.asyncio
    async def test_clean_task_exit_keeps_waiting(self):
        coordinator = ShutdownCoordinator()
        coordinator.watch(asyncio.create_task(asyncio.sleep(0)))

        waiter = asyncio.create_task(coordinator.wait_for_shutdown())
        await asyncio.sleep(0.05)
        assert waiter.done() is False

        coordinator.request_shutdown("test")
        await asyncio.wait_for(waiter, timeout=1.0)


class TestHandlers:

    @pytest.mark.asyncio
    async def test_watch_face_handler_stops_timer_and_animation(self, watch_face, scheduler):
        watch_face.start()
        watch_face.trigger_animation("12:00")
        handler = WatchFaceShutdownHandler(watch_face)

        await handler.shutdown()

        assert handler.shutdown_priority == 130
        assert watch_face.animator.is_running() is False
        assert scheduler.pending_count() == 0

    @pytest.mark.asyncio
    async def test_task_cancellation_handler(self):
        async def forever():
            await asyncio.sleep(3600)

        task = asyncio.create_task(forever())
        handler = TaskCancellationHandler([task])

        await handler.shutdown()

        assert task.cancelled() is True
