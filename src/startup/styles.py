"""
터미널 스타일 (Nord 팔레트) + 박스 문자.

색상 활성화 정책:
- "always": 항상 색상
- "never": 색상 없음 (NO_COLOR 환경변수도 동일)
- "auto": 출력 스트림이 TTY일 때만
"""

import os
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import TextIO

RESET = "\x1b[0m"
BOLD = "\x1b[1m"

StyleFn = Callable[[str], str]


def _hex_style(hex_color: str, bold: bool = False) -> StyleFn:
    """#RRGGBB → 24bit 전경색 스타일 함수."""
    r, g, b = (int(hex_color[i:i + 2], 16) for i in (1, 3, 5))
    prefix = (BOLD if bold else "") + f"\x1b[38;2;{r};{g};{b}m"

    def apply(text: str) -> str:
        return f"{prefix}{text}{RESET}"

    return apply


def _plain(text: str) -> str:
    return text


# =============================================================================
# Box Characters
# =============================================================================

@dataclass(frozen=True)
class BoxChars:
    """패널 테두리 문자 (모두 1컬럼)."""
    top_left: str = "╭"
    top_right: str = "╮"
    bottom_left: str = "╰"
    bottom_right: str = "╯"
    vertical: str = "│"
    outer_horizontal: str = "═"
    horizontal: str = "─"
    left_tee: str = "├"
    right_tee: str = "┤"


# =============================================================================
# Theme
# =============================================================================

@dataclass(frozen=True)
class Theme:
    """역할별 스타일 함수 모음."""
    title: StyleFn = _plain
    separator: StyleFn = _plain
    label: StyleFn = _plain
    value: StyleFn = _plain
    success: StyleFn = _plain
    warning: StyleFn = _plain
    error: StyleFn = _plain
    info: StyleFn = _plain
    highlight: StyleFn = _plain
    dim: StyleFn = _plain
    box: BoxChars = BoxChars()

    @classmethod
    def nord(cls) -> "Theme":
        return cls(
            title=_hex_style("#88C0D0", bold=True),  # 북극 블루
            separator=_hex_style("#4C566A"),         # 짙은 회청색
            label=_hex_style("#8FBCBB"),             # 청록
            value=_hex_style("#A3BE8C"),             # 부드러운 녹색
            success=_hex_style("#A3BE8C"),
            warning=_hex_style("#EBCB8B"),           # 따뜻한 노랑
            error=_hex_style("#BF616A"),             # 부드러운 빨강
            info=_hex_style("#81A1C1"),              # 하늘색
            highlight=_hex_style("#B48EAD"),         # 연보라
            dim=_hex_style("#4C566A"),
        )

    @classmethod
    def plain(cls) -> "Theme":
        return cls()


def colors_enabled(mode: str = "auto", stream: TextIO | None = None) -> bool:
    """색상 출력 여부 결정."""
    if mode == "never" or os.environ.get("NO_COLOR"):
        return False
    if mode == "always":
        return True
    stream = stream or sys.stdout
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def get_theme(mode: str = "auto", stream: TextIO | None = None) -> Theme:
    """색상 모드에 맞는 Theme 반환."""
    return Theme.nord() if colors_enabled(mode, stream) else Theme.plain()
