"""
서버 프로세스용 시작 대시보드.

흐름:
    시작 애니메이션 → RenderSession.start() → (실행 중) → stop() → 종료 메시지

stop()/shutdown()은 시그널 핸들러, lifespan 종료, 에러 핸들러 어디서 호출되어도
안전하도록 멱등.
"""

import asyncio
import logging
from collections.abc import Callable
from functools import partial

from src.core.config import Settings
from src.domain.schemas import ServerInfo, StatusRecord
from src.startup import (
    Panel,
    RedrawMode,
    RenderSession,
    SessionState,
    StatusSnapshot,
    StatusSource,
    StreamTerminal,
    Terminal,
    build_status_panel,
    collect_server_info,
    get_theme,
    show_error,
    show_shutdown_error,
    show_shutdown_info,
    show_shutdown_success,
    show_startup_animation,
)

logger = logging.getLogger(__name__)


class StartupDashboard:
    """
    설정 → RenderSession 조립 + 시작/종료 메시지.

    Usage:
        dashboard = StartupDashboard(settings, source)
        await dashboard.start()
        ...
        dashboard.shutdown()
    """

    def __init__(
        self,
        settings: Settings,
        source: StatusSource,
        terminal: Terminal | None = None,
        server: ServerInfo | None = None,
    ):
        self.settings = settings
        self.terminal = terminal or StreamTerminal()
        stream = getattr(self.terminal, "stream", None)
        self.theme = get_theme(settings.dashboard.color, stream)
        self.server = server or collect_server_info(
            settings.server.host, settings.server.port, settings.server.env
        )
        self.session = RenderSession(
            StatusSnapshot(source, redact_errors=settings.dashboard.redact_errors),
            self.build_panel,
            self.terminal,
            theme=self.theme,
            interval_ms=settings.dashboard.interval_ms,
            redraw_mode=RedrawMode(settings.dashboard.redraw),
        )
        self._shutting_down = False
        self._stop_requested = asyncio.Event()

    def build_panel(self, record: StatusRecord, frame: str) -> Panel:
        return build_status_panel(
            record,
            frame,
            self.server,
            self.theme,
            width=self.settings.dashboard.width,
            flags=self.settings.features.to_dict(),
        )

    async def start(self) -> None:
        """
        시작 애니메이션 후 세션 시작.

        애니메이션 중 stop()이 호출되면 애니메이션을 끊고 조용히 반환.

        Raises:
            DashboardError: 레이아웃 에러 (터미널 폭 조회 불가 등)
        """
        await show_startup_animation(
            self.terminal,
            self.theme,
            duration=self.settings.dashboard.startup_animation_seconds,
            stop_event=self._stop_requested,
        )
        if self.session.state is not SessionState.IDLE:
            logger.debug("startup dashboard stopped during animation")
            return
        await self.session.start()

    def start_in_background(self) -> asyncio.Task[None]:
        """
        start()를 태스크로 실행 (서버 기동을 막지 않음).

        실패 시 에러 메시지 출력 후 세션 정리.
        """
        task = asyncio.create_task(self.start(), name="startup-dashboard")
        task.add_done_callback(partial(_report_start_failure, self))
        return task

    def stop(self) -> None:
        """애니메이션/리사이즈 구독 정리 (멱등)."""
        self._stop_requested.set()
        self.session.stop()

    def shutdown(self, close: Callable[[], None] | None = None) -> None:
        """
        세션 종료 + 리소스 정리 + 종료 메시지 (한 번만 출력).

        Args:
            close: 데이터 저장소 연결 종료 함수

        Raises:
            close()에서 발생한 예외 (에러 메시지 출력 후 전파)
        """
        self.stop()
        if self._shutting_down:
            return
        self._shutting_down = True

        show_shutdown_info(self.terminal, self.theme)
        try:
            if close is not None:
                close()
        except Exception as e:
            show_shutdown_error(self.terminal, self.theme, e)
            raise
        show_shutdown_success(self.terminal, self.theme)


def _report_start_failure(dashboard: StartupDashboard, task: asyncio.Task[None]) -> None:
    if task.cancelled():
        logger.debug("startup dashboard cancelled")
        dashboard.stop()
        return
    error = task.exception()
    if error is not None:
        dashboard.stop()
        show_error(dashboard.terminal, dashboard.theme, "启动信息显示失败", error)
