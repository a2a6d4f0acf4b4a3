"""
시작/종료 배너: 상태 패널 내용 + 시작 애니메이션 + 에러/종료 메시지.

패널 섹션:
- 상태: 数据库连接 / 服务器状态 (스피너 프레임)
- 服务器信息: 실행 모드, PID, 주소, 시작 시각, Python 버전, 플랫폼
- 数据库信息: 연결 상태, 호스트, DB 이름, 에러 또는 테이블별 레코드 수
- API信息: 문서 URL
- 开发模式配置: development 환경에서만
"""

import asyncio
import logging
import os
import platform
import sys
from contextlib import suppress
from datetime import datetime

from src.domain.constants import (
    DEFAULT_PANEL_WIDTH,
    ENV_DEVELOPMENT,
    LABEL_WIDTH,
    MESSAGE_SEPARATOR_WIDTH,
    PANEL_TITLE,
    STARTUP_ANIMATION_INTERVAL_MS,
    STARTUP_ANIMATION_SECONDS,
)
from src.domain.schemas import ServerInfo, StatusRecord

from .animation import PROGRESS_FRAMES, AnimationLoop
from .box import Panel, Section, label_line
from .styles import Theme
from .terminal import Terminal

logger = logging.getLogger(__name__)

STATUS_CONNECTED = "已连接"
STATUS_CONNECT_ERROR = "连接错误"
UNKNOWN = "未知"


def collect_server_info(host: str, port: int, env: str) -> ServerInfo:
    """현재 프로세스 기준 ServerInfo 생성."""
    return ServerInfo(
        host=host,
        port=port,
        env=env,
        pid=os.getpid(),
        started_at=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        python_version=platform.python_version(),
        platform=sys.platform,
    )


# =============================================================================
# Panel Content
# =============================================================================


def _flag_line(enabled: bool, on_text: str, off_text: str, theme: Theme) -> str:
    return theme.success(f" ✓ {on_text}") if enabled else theme.error(f" ✗ {off_text}")


def _database_lines(record: StatusRecord, theme: Theme) -> list[str]:
    status = STATUS_CONNECTED if record.connected else STATUS_CONNECT_ERROR
    status_style = theme.success if record.connected else theme.error
    lines = [
        label_line("连接状态", status_style(status), theme, LABEL_WIDTH),
        label_line("主机地址", theme.value(record.host or UNKNOWN), theme, LABEL_WIDTH),
        label_line("数据库名", theme.value(record.database or UNKNOWN), theme, LABEL_WIDTH),
    ]
    if record.error:
        lines.append(label_line("错误信息", theme.error(record.error), theme, LABEL_WIDTH))
        return lines

    lines += ["", theme.label(" 数据表信息:"), ""]
    for stat in record.entities:
        if stat.failed:
            lines.append(theme.error(f"   • {stat.name} (统计失败)"))
        else:
            lines.append(theme.success(f"   • {stat.name} ({stat.count}条记录)"))
    return lines


def _dev_lines(record: StatusRecord, flags: dict[str, bool], theme: Theme) -> list[str]:
    if flags.get("db_sync_alter"):
        sync_line = theme.success(" ✓ 已启用数据库自动同步 (alter)")
    elif flags.get("db_sync_force"):
        sync_line = theme.warning(" ⚠ 已启用数据库强制同步 (force)")
    else:
        sync_line = theme.error(" ✗ 未启用数据库同步")

    lines = [
        sync_line,
        _flag_line(flags.get("enable_api_docs", False), "已启用API文档", "未启用API文档", theme),
        _flag_line(
            flags.get("enable_request_log", False), "已启用请求日志", "未启用请求日志", theme
        ),
        "",
        theme.label(" 数据库表列表:"),
        "",
    ]
    lines += [theme.success(f"   • {name}") for name in record.entity_names]
    lines += ["", theme.dim(" 提示: 使用 DB_SYNC_ALTER=true 来自动同步表结构")]
    return lines


def build_status_panel(
    record: StatusRecord,
    frame: str,
    server: ServerInfo,
    theme: Theme,
    width: int = DEFAULT_PANEL_WIDTH,
    flags: dict[str, bool] | None = None,
) -> Panel:
    """
    스냅샷 + 애니메이션 프레임 → Panel.

    매 tick 새로 생성된다. 연결 실패도 패널 안의 에러 줄로 표시.

    Args:
        record: 캐시된 상태 스냅샷
        frame: 현재 스피너 프레임
        server: 서버 정보
        theme: 스타일
        width: 패널 전체 폭
        flags: 개발 모드 플래그 (db_sync_alter, db_sync_force, enable_api_docs, enable_request_log)

    Returns:
        Panel
    """
    db_status = (
        theme.success(STATUS_CONNECTED) if record.connected
        else theme.error(STATUS_CONNECT_ERROR)
    )
    status = Section(lines=[
        label_line("数据库连接", db_status, theme, LABEL_WIDTH),
        label_line(
            "服务器状态",
            theme.success(frame) + " " + theme.success("运行中"),
            theme,
            LABEL_WIDTH,
        ),
    ])

    server_section = Section(title="服务器信息", lines=[
        label_line("运行模式", theme.value(server.env), theme, LABEL_WIDTH),
        label_line("进程 ID", theme.value(str(server.pid)), theme, LABEL_WIDTH),
        label_line("监听地址", theme.value(f"{server.host}:{server.port}"), theme, LABEL_WIDTH),
        label_line("启动时间", theme.value(server.started_at), theme, LABEL_WIDTH),
        label_line("Python版本", theme.value(server.python_version), theme, LABEL_WIDTH),
        label_line("系统平台", theme.value(server.platform), theme, LABEL_WIDTH),
    ])

    database_section = Section(title="数据库信息", lines=_database_lines(record, theme))

    api_section = Section(title="API信息", lines=[
        label_line("接口文档", theme.info(f"{server.base_url}/docs"), theme, LABEL_WIDTH),
        label_line("OpenAPI", theme.info(f"{server.base_url}/openapi.json"), theme, LABEL_WIDTH),
    ])

    sections = [status, server_section, database_section, api_section]
    if server.env == ENV_DEVELOPMENT:
        sections.append(
            Section(title="开发模式配置", lines=_dev_lines(record, flags or {}, theme))
        )

    return Panel(title=PANEL_TITLE, sections=sections, width=width)


# =============================================================================
# Startup Animation
# =============================================================================


async def show_startup_animation(
    terminal: Terminal,
    theme: Theme,
    duration: float = STARTUP_ANIMATION_SECONDS,
    interval_ms: float = STARTUP_ANIMATION_INTERVAL_MS,
    text: str = "正在启动服务器...",
    stop_event: asyncio.Event | None = None,
) -> int:
    """
    진행 바 애니메이션을 duration초 동안 표시 후 줄 지우기.

    Args:
        stop_event: set되면 duration 전이라도 즉시 종료

    Returns:
        실행된 tick 수
    """
    if duration <= 0 or (stop_event is not None and stop_event.is_set()):
        return 0
    stop_event = stop_event or asyncio.Event()

    loop = AnimationLoop(PROGRESS_FRAMES)

    def draw(frame: str) -> None:
        terminal.write(f"\r{theme.info(frame)} {text}")

    draw(loop.frame)
    loop.start(interval_ms, draw)
    try:
        with suppress(asyncio.TimeoutError):
            await asyncio.wait_for(stop_event.wait(), timeout=duration)
    finally:
        loop.stop()
        terminal.write("\r\x1b[2K")
    return loop.ticks


# =============================================================================
# Error / Shutdown Messages
# =============================================================================


def _separator(theme: Theme, char: str = "═") -> str:
    return theme.separator(char * MESSAGE_SEPARATOR_WIDTH)


def show_error(terminal: Terminal, theme: Theme, title: str, error: BaseException) -> None:
    """에러 메시지 출력 + 로그."""
    terminal.write("\n" + _separator(theme) + "\n")
    terminal.write(theme.error(f"\n✖ {title}\n") + "\n")
    terminal.write(theme.error("错误详情:") + "\n")
    terminal.write(f"{type(error).__name__}: {error}\n")
    terminal.write("\n" + _separator(theme) + "\n\n")
    logger.error(title, exc_info=error)


def show_shutdown_info(terminal: Terminal, theme: Theme) -> None:
    terminal.write("\n" + _separator(theme) + "\n")
    terminal.write(theme.warning("\n正在关闭服务器...\n") + "\n")


def show_shutdown_success(terminal: Terminal, theme: Theme) -> None:
    terminal.write(theme.success("• HTTP服务器已关闭") + "\n")
    terminal.write(theme.success("• 数据库连接已关闭") + "\n")
    terminal.write(theme.success("\n✨ 服务器已成功关闭 ✨\n") + "\n")
    terminal.write(_separator(theme) + "\n\n")


def show_shutdown_error(terminal: Terminal, theme: Theme, error: BaseException) -> None:
    terminal.write(theme.error("服务器关闭时发生错误:") + "\n")
    terminal.write(f"{type(error).__name__}: {error}\n")
    terminal.write("\n" + _separator(theme) + "\n\n")
    logger.error("shutdown failed", exc_info=error)
