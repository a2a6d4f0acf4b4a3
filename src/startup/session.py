"""
실행 중 대시보드 세션.

상태 전이: IDLE → STARTING → RUNNING → STOPPED

- start(): 스냅샷 1회 수집 → 전체 지우기 + 렌더링 → 애니메이션 시작
- tick: 캐시된 스냅샷 + 진행된 프레임으로 재렌더링 (커서 위로 이동 후 덮어쓰기)
- 리사이즈: 전체 지우기 + 재렌더링 (재수집 없음), 이후 tick은 다시 in-place
- stop(): 애니메이션 취소 + 리사이즈 구독 해제 (멱등, 재시작 없음)

스냅샷은 세션 시작 시점 데이터로 고정 (tick마다 collect() 재호출하지 않음).
터미널 높이가 패널보다 작을 때의 동작은 정의하지 않음 (in-place 재렌더링이 어긋날 수 있음).
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from src.domain.constants import DEFAULT_TICK_INTERVAL_MS
from src.domain.errors import DashboardError, ErrorCodes
from src.domain.schemas import StatusRecord

from .animation import SPINNER_FRAMES, AnimationLoop
from .box import Panel, render_panel
from .snapshot import StatusSnapshot
from .styles import Theme
from .terminal import ERASE_BELOW, Terminal

logger = logging.getLogger(__name__)

# (스냅샷, 현재 프레임) → 새 Panel
PanelBuilder = Callable[[StatusRecord, str], Panel]


class SessionState(str, Enum):
    IDLE = "idle"
    STARTING = "starting"
    RUNNING = "running"
    STOPPED = "stopped"


class RedrawMode(str, Enum):
    """
    tick 재렌더링 방식.

    in_place: 커서 위로 이동 후 덮어쓰기 (깜빡임/스크롤백 최소화)
    full: 매 tick 전체 지우기 (뷰포트 변화에 안전)
    """
    IN_PLACE = "in_place"
    FULL = "full"


@dataclass
class RenderState:
    """세션 전용 렌더링 상태 (start()에서 생성, stop()에서 폐기)."""
    line_count: int = 0
    running: bool = False
    unsubscribe_resize: Callable[[], None] | None = None


class RenderSession:
    """
    StatusSnapshot + BoxRenderer + AnimationLoop 조합.

    Usage:
        session = RenderSession(StatusSnapshot(source), build_panel, StreamTerminal())
        await session.start()
        ...
        session.stop()
    """

    def __init__(
        self,
        snapshot: StatusSnapshot,
        build_panel: PanelBuilder,
        terminal: Terminal,
        theme: Theme | None = None,
        interval_ms: float = DEFAULT_TICK_INTERVAL_MS,
        frames: Sequence[str] = SPINNER_FRAMES,
        redraw_mode: RedrawMode = RedrawMode.IN_PLACE,
    ):
        self.snapshot = snapshot
        self.build_panel = build_panel
        self.terminal = terminal
        self.theme = theme or Theme.plain()
        self.interval_ms = interval_ms
        self.redraw_mode = RedrawMode(redraw_mode)
        self.animation = AnimationLoop(frames)

        self.state = SessionState.IDLE
        self.record: StatusRecord | None = None
        self.render_state: RenderState | None = None

        # 통계 (테스트/디버깅용)
        self.frames_rendered = 0
        self.full_renders = 0

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def start(self) -> None:
        """
        스냅샷 수집 후 첫 렌더링, 애니메이션 시작.

        Raises:
            DashboardError: SESSION_NOT_IDLE (이미 시작/종료된 세션),
                TERMINAL_WIDTH_UNAVAILABLE (레이아웃 에러)
        """
        if self.state is not SessionState.IDLE:
            raise DashboardError(ErrorCodes.SESSION_NOT_IDLE, state=self.state.value)

        self.state = SessionState.STARTING
        logger.debug("render session starting")

        record = await self.snapshot.collect()
        if self.state is not SessionState.STARTING:
            # 수집 대기 중 stop() 호출됨
            logger.debug("render session stopped before first render")
            return

        render_state = RenderState(running=True)
        self.record = record
        self.render_state = render_state
        try:
            self._render_full(record, render_state)
        except Exception:
            logger.error("initial dashboard render failed", exc_info=True)
            self.stop()
            raise

        self.animation.start(self.interval_ms, self._on_tick)
        render_state.unsubscribe_resize = self.terminal.subscribe_resize(self._on_resize)
        self.state = SessionState.RUNNING
        logger.debug(f"render session running ({render_state.line_count} lines)")

    def stop(self) -> None:
        """애니메이션 취소 + 리사이즈 구독 해제 (멱등)."""
        if self.state is SessionState.STOPPED:
            return

        self.animation.stop()
        render_state = self.render_state
        if render_state is not None:
            render_state.running = False
            if render_state.unsubscribe_resize is not None:
                render_state.unsubscribe_resize()
                render_state.unsubscribe_resize = None
        self.render_state = None
        self.state = SessionState.STOPPED
        logger.debug("render session stopped")

    @property
    def running(self) -> bool:
        return self.state is SessionState.RUNNING

    # =========================================================================
    # Rendering
    # =========================================================================

    def _compose(self, record: StatusRecord) -> list[str]:
        panel = self.build_panel(record, self.animation.frame)
        if panel.width > 0:
            columns = self.terminal.columns()
            if columns < panel.width:
                logger.warning(
                    f"terminal ({columns} cols) narrower than panel ({panel.width} cols)"
                )
        return render_panel(panel, self.theme)

    def _write(self, render_state: RenderState, lines: list[str]) -> None:
        self.terminal.write("\n".join(lines) + "\n")
        if len(lines) < render_state.line_count:
            self.terminal.write(ERASE_BELOW)
        render_state.line_count = len(lines)
        self.frames_rendered += 1

    def _render_full(self, record: StatusRecord, render_state: RenderState) -> None:
        # 레이아웃 에러가 화면을 지우기 전에 발생하도록 먼저 구성
        lines = self._compose(record)
        self.terminal.clear()
        self._write(render_state, lines)
        self.full_renders += 1

    def _redraw_in_place(self, record: StatusRecord, render_state: RenderState) -> None:
        lines = self._compose(record)
        self.terminal.move_up(render_state.line_count)
        self._write(render_state, lines)

    def _on_tick(self, frame: str) -> None:
        record, render_state = self.record, self.render_state
        if self.state is not SessionState.RUNNING or record is None or render_state is None:
            return
        if self.redraw_mode is RedrawMode.FULL:
            self._render_full(record, render_state)
        else:
            self._redraw_in_place(record, render_state)

    def _on_resize(self) -> None:
        # STARTING 중 리사이즈는 무시 (렌더 상태 없음)
        record, render_state = self.record, self.render_state
        if self.state is not SessionState.RUNNING or record is None or render_state is None:
            return
        logger.debug("terminal resized; full redraw")
        self._render_full(record, render_state)
