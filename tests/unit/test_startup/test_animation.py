"""
test_animation.py - 애니메이션 루프 테스트

검증 포인트:
- 프레임 순환
- stop() 멱등, stop() 이후 tick 없음
- start() 중복 호출 시 타이머 교체 (누수 없음)
- on_tick 예외는 이벤트 루프 exception handler로 전파
"""

import asyncio

import pytest

from src.startup.animation import PROGRESS_FRAMES, SPINNER_FRAMES, AnimationLoop, FrameCycle

# =============================================================================
# FrameCycle
# =============================================================================


class TestFrameCycle:
    """FrameCycle 테스트."""

    def test_starts_at_first_frame(self):
        assert FrameCycle(["a", "b"]).current == "a"

    def test_advance_wraps(self):
        cycle = FrameCycle(["a", "b", "c"])

        frames = [cycle.advance() for _ in range(4)]

        assert frames == ["b", "c", "a", "b"]

    def test_empty_frames_rejected(self):
        with pytest.raises(ValueError):
            FrameCycle([])

    def test_builtin_frame_sets(self):
        assert len(SPINNER_FRAMES) == 10
        assert len(PROGRESS_FRAMES) == 14


# =============================================================================
# AnimationLoop
# =============================================================================


class TestAnimationLoop:
    """AnimationLoop 테스트."""

    @pytest.mark.asyncio
    async def test_ticks_advance_frames(self):
        loop = AnimationLoop(["a", "b", "c"])
        seen: list[str] = []

        loop.start(5, seen.append)
        await asyncio.sleep(0.1)
        loop.stop()

        assert len(seen) >= 3
        assert seen[:3] == ["b", "c", "a"]
        assert loop.ticks == len(seen)

    @pytest.mark.asyncio
    async def test_not_running_before_start(self):
        loop = AnimationLoop()

        assert loop.running is False
        assert loop.frame == SPINNER_FRAMES[0]

    @pytest.mark.asyncio
    async def test_stop_twice_is_noop(self):
        loop = AnimationLoop()
        seen: list[str] = []

        loop.start(5, seen.append)
        await asyncio.sleep(0.03)
        loop.stop()
        loop.stop()
        count = len(seen)
        await asyncio.sleep(0.05)

        assert loop.running is False
        assert len(seen) == count

    @pytest.mark.asyncio
    async def test_stop_without_start(self):
        AnimationLoop().stop()

    @pytest.mark.asyncio
    async def test_stop_inside_tick(self):
        """on_tick 안에서 stop() → 더 이상 tick 없음."""
        loop = AnimationLoop()
        seen: list[str] = []

        def on_tick(frame: str) -> None:
            seen.append(frame)
            loop.stop()

        loop.start(5, on_tick)
        await asyncio.sleep(0.05)

        assert len(seen) == 1
        assert loop.running is False

    @pytest.mark.asyncio
    async def test_restart_replaces_timer(self):
        """start() 두 번 → 이전 콜백은 더 이상 호출되지 않음."""
        loop = AnimationLoop()
        first: list[str] = []
        second: list[str] = []

        loop.start(5, first.append)
        loop.start(5, second.append)
        await asyncio.sleep(0.05)
        loop.stop()

        assert first == []
        assert len(second) >= 1

    @pytest.mark.asyncio
    async def test_ticks_not_reset_on_restart(self):
        loop = AnimationLoop()

        loop.start(5, lambda frame: None)
        await asyncio.sleep(0.03)
        loop.stop()
        before = loop.ticks
        loop.start(5, lambda frame: None)
        await asyncio.sleep(0.03)
        loop.stop()

        assert before >= 1
        assert loop.ticks > before

    @pytest.mark.asyncio
    async def test_invalid_interval(self):
        with pytest.raises(ValueError):
            AnimationLoop().start(0, lambda frame: None)

    def test_start_without_running_loop(self):
        with pytest.raises(RuntimeError):
            AnimationLoop().start(10, lambda frame: None)


# =============================================================================
# Error Propagation
# =============================================================================


class TestTickErrors:
    """on_tick 예외 전파 테스트."""

    @pytest.mark.asyncio
    async def test_exception_reaches_loop_handler(self):
        event_loop = asyncio.get_running_loop()
        contexts: list[dict] = []
        previous = event_loop.get_exception_handler()
        event_loop.set_exception_handler(lambda loop, context: contexts.append(context))

        animation = AnimationLoop()

        def on_tick(frame: str) -> None:
            raise RuntimeError("render exploded")

        try:
            animation.start(5, on_tick)
            await asyncio.sleep(0.03)
        finally:
            animation.stop()
            event_loop.set_exception_handler(previous)

        assert contexts
        assert isinstance(contexts[0]["exception"], RuntimeError)
        assert str(contexts[0]["exception"]) == "render exploded"

    @pytest.mark.asyncio
    async def test_loop_keeps_ticking_after_error(self):
        """예외 후에도 다음 tick은 예약되어 있음 (중단은 handler의 몫)."""
        event_loop = asyncio.get_running_loop()
        previous = event_loop.get_exception_handler()
        event_loop.set_exception_handler(lambda loop, context: None)

        animation = AnimationLoop()

        def on_tick(frame: str) -> None:
            raise RuntimeError("boom")

        try:
            animation.start(5, on_tick)
            await asyncio.sleep(0.05)
        finally:
            animation.stop()
            event_loop.set_exception_handler(previous)

        assert animation.ticks >= 2
