"""
취소 가능한 반복 애니메이션 타이머 (asyncio 이벤트 루프 기반).

계약:
- start() 중복 호출 → 이전 타이머 취소 후 교체 (타이머 누수 없음)
- stop() 멱등: 이미 멈춘 루프에서 호출해도 no-op
- stop() 반환 후 on_tick 호출 없음
- on_tick 예외는 잡지 않음 → 이벤트 루프 exception handler로 전파
- 단일 스레드 이벤트 루프에서만 실행되므로 tick이 겹치지 않음
"""

import asyncio
from collections.abc import Callable, Sequence

# 실행 상태 스피너 (braille)
SPINNER_FRAMES: tuple[str, ...] = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")

# 시작 진행 바
PROGRESS_FRAMES: tuple[str, ...] = (
    "▰▱▱▱▱▱▱",
    "▰▰▱▱▱▱▱",
    "▰▰▰▱▱▱▱",
    "▰▰▰▰▱▱▱",
    "▰▰▰▰▰▱▱",
    "▰▰▰▰▰▰▱",
    "▰▰▰▰▰▰▰",
    "▰▰▰▰▰▰▰",
    "▱▰▰▰▰▰▰",
    "▱▱▰▰▰▰▰",
    "▱▱▱▰▰▰▰",
    "▱▱▱▱▰▰▰",
    "▱▱▱▱▱▰▰",
    "▱▱▱▱▱▱▰",
)


class FrameCycle:
    """고정 프레임 시퀀스 + 현재 인덱스 (tick마다 순환)."""

    def __init__(self, frames: Sequence[str]):
        if not frames:
            raise ValueError("frames must not be empty")
        self.frames = tuple(frames)
        self.index = 0

    @property
    def current(self) -> str:
        return self.frames[self.index]

    def advance(self) -> str:
        self.index = (self.index + 1) % len(self.frames)
        return self.current


class AnimationLoop:
    """
    interval_ms마다 프레임을 진행하고 on_tick(frame)을 호출.

    Usage:
        loop = AnimationLoop(SPINNER_FRAMES)
        loop.start(80, lambda frame: redraw(frame))
        ...
        loop.stop()
    """

    def __init__(self, frames: Sequence[str] = SPINNER_FRAMES):
        self.cycle = FrameCycle(frames)
        # start()로 리셋되지 않는 누적 tick 수
        self.ticks = 0
        self._handle: asyncio.TimerHandle | None = None
        self._interval = 0.0
        self._on_tick: Callable[[str], None] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._deadline = 0.0

    @property
    def running(self) -> bool:
        return self._handle is not None

    @property
    def frame(self) -> str:
        return self.cycle.current

    def start(self, interval_ms: float, on_tick: Callable[[str], None]) -> None:
        """
        반복 타이머 시작.

        Args:
            interval_ms: tick 간격 (밀리초, > 0)
            on_tick: 매 tick 동기 호출 (인자: 진행된 프레임)

        Raises:
            ValueError: interval_ms <= 0
            RuntimeError: 실행 중인 이벤트 루프 없음
        """
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive: {interval_ms}")

        loop = asyncio.get_running_loop()
        self.stop()

        self._loop = loop
        self._interval = interval_ms / 1000.0
        self._on_tick = on_tick
        self._deadline = loop.time() + self._interval
        self._handle = loop.call_at(self._deadline, self._fire)

    def stop(self) -> None:
        """타이머 취소 (멱등)."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._on_tick = None

    def _fire(self) -> None:
        loop = self._loop
        on_tick = self._on_tick
        if loop is None or on_tick is None:
            return

        # 다음 tick 먼저 예약: on_tick이 raise해도 루프는 계속됨
        self._deadline += self._interval
        now = loop.time()
        if self._deadline <= now:
            # 밀린 tick은 몰아서 실행하지 않음
            self._deadline = now + self._interval
        self._handle = loop.call_at(self._deadline, self._fire)

        self.ticks += 1
        on_tick(self.cycle.advance())
