"""
테두리 박스 레이아웃.

핵심 계약 (padding invariant):
- 출력되는 모든 줄(테두리/제목/내용)은 스타일 제거 후 표시 폭이 정확히 width
- width는 테두리 문자를 포함한 전체 폭, 내용 영역은 width - 2
- 내용이 내용 영역보다 넓으면 패딩 0 → 오른쪽 테두리가 밀림 (자르기/줄바꿈 없음)

레이아웃:
    ╭═ 제목 ═══════════╮
    ├──────────────────┤   ← 섹션마다
    │ 섹션 제목         │   ← 선택
    │내용               │
    ╰══════════════════╯
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from .styles import Theme
from .width import display_width, pad_to_width


@dataclass
class Section:
    """선택적 제목 + 내용 줄 목록."""
    title: str | None = None
    lines: list[str] = field(default_factory=list)


@dataclass
class Panel:
    """
    최상위 렌더링 단위.

    매 렌더링마다 새로 만든다 (in-place 수정 금지).
    """
    title: str | None
    sections: list[Section]
    width: int


# =============================================================================
# Line Builders
# =============================================================================


def _content_line(text: str, inner: int, theme: Theme) -> str:
    border = theme.separator(theme.box.vertical)
    return border + pad_to_width(text, inner) + border


def _top_border(title: str | None, inner: int, theme: Theme) -> str:
    box = theme.box
    if not title:
        return theme.separator(box.top_left + box.outer_horizontal * inner + box.top_right)

    # ╭═ 제목 ═…═╮ : 앞쪽 "═ " + 제목 + " " 이후 남은 폭을 채움
    head = box.outer_horizontal + " "
    tail_width = max(0, inner - display_width(head) - display_width(title) - 1)
    return (
        theme.separator(box.top_left + head)
        + theme.title(title)
        + theme.separator(" " + box.outer_horizontal * tail_width + box.top_right)
    )


def _separator(inner: int, theme: Theme) -> str:
    box = theme.box
    return theme.separator(box.left_tee + box.horizontal * inner + box.right_tee)


def _bottom_border(inner: int, theme: Theme) -> str:
    box = theme.box
    return theme.separator(box.bottom_left + box.outer_horizontal * inner + box.bottom_right)


# =============================================================================
# Public API
# =============================================================================


def render_box(
    title: str | None,
    sections: Sequence[Section],
    width: int,
    theme: Theme | None = None,
) -> list[str]:
    """
    섹션 목록을 테두리 박스 줄 목록으로 렌더링.

    Args:
        title: 상단 테두리에 넣을 제목 (None이면 테두리만)
        sections: 순서대로 출력할 섹션
        width: 테두리 포함 전체 표시 폭
        theme: 스타일 (None이면 무색)

    Returns:
        줄 목록 (개행 문자 없음)
    """
    theme = theme or Theme.plain()
    inner = max(0, width - 2)

    lines = [_top_border(title, inner, theme)]
    for section in sections:
        lines.append(_separator(inner, theme))
        if section.title:
            lines.append(_content_line(" " + theme.title(section.title), inner, theme))
        for line in section.lines:
            lines.append(_content_line(line, inner, theme))
    lines.append(_bottom_border(inner, theme))
    return lines


def render_panel(panel: Panel, theme: Theme | None = None) -> list[str]:
    """Panel → 줄 목록."""
    return render_box(panel.title, panel.sections, panel.width, theme)


def label_line(label: str, value: str, theme: Theme, label_width: int) -> str:
    """
    "라벨  │ 값" 형식의 내용 줄.

    라벨은 표시 폭 기준으로 label_width까지 패딩 (한글/중국어 라벨 정렬).
    """
    return theme.label(" " + pad_to_width(label, label_width) + "│ ") + value
