"""
Startup layer: 터미널 상태 대시보드.

역할:
- width: 표시 폭 계산 (ANSI 제거, CJK 2컬럼)
- box: 테두리 박스 레이아웃
- snapshot: 데이터 저장소 상태 수집 (raise 없음)
- animation: 취소 가능한 반복 타이머
- session: 첫 렌더링 → in-place 재렌더링 → 리사이즈 → 종료
- banner: 패널 내용 + 시작/종료 메시지
"""

from .animation import PROGRESS_FRAMES, SPINNER_FRAMES, AnimationLoop, FrameCycle
from .banner import (
    build_status_panel,
    collect_server_info,
    show_error,
    show_shutdown_error,
    show_shutdown_info,
    show_shutdown_success,
    show_startup_animation,
)
from .box import Panel, Section, label_line, render_box, render_panel
from .session import RedrawMode, RenderSession, RenderState, SessionState
from .snapshot import StatusSnapshot, StatusSource
from .styles import BoxChars, Theme, colors_enabled, get_theme
from .terminal import StreamTerminal, Terminal
from .width import display_width, is_wide, pad_to_width, strip_style

__all__ = [
    # width
    "strip_style",
    "display_width",
    "is_wide",
    "pad_to_width",
    # styles
    "Theme",
    "BoxChars",
    "colors_enabled",
    "get_theme",
    # box
    "Section",
    "Panel",
    "render_box",
    "render_panel",
    "label_line",
    # snapshot
    "StatusSource",
    "StatusSnapshot",
    # animation
    "FrameCycle",
    "AnimationLoop",
    "SPINNER_FRAMES",
    "PROGRESS_FRAMES",
    # terminal
    "Terminal",
    "StreamTerminal",
    # session
    "SessionState",
    "RedrawMode",
    "RenderState",
    "RenderSession",
    # banner
    "build_status_panel",
    "collect_server_info",
    "show_startup_animation",
    "show_error",
    "show_shutdown_info",
    "show_shutdown_success",
    "show_shutdown_error",
]
