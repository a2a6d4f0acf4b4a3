"""
터미널 표시 폭 계산.

규칙:
- 스타일 이스케이프 시퀀스(ANSI CSI/OSC)는 폭 0
- 코드 포인트 단위로 계산 (바이트 아님)
- wide 범위(CJK, 전각 문자 등)는 2컬럼, 나머지는 1컬럼
- 결합 문자/zero-width 문자는 고려하지 않음 (1컬럼으로 계산)
"""

import re

# CSI: ESC [ params intermediates final / OSC: ESC ] ... (BEL | ESC \)
_STYLE_ESCAPE_RE = re.compile(
    r"\x1b\[[0-?]*[ -/]*[@-~]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
)

# (시작, 끝) 포함 범위 - 시작 코드 포인트 순 정렬
WIDE_RANGES: tuple[tuple[int, int], ...] = (
    (0x3000, 0x303F),  # CJK Symbols and Punctuation (、。《》【】 등)
    (0x3040, 0x30FF),  # Hiragana / Katakana
    (0x3400, 0x4DBF),  # CJK Unified Ideographs Extension A
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0xAC00, 0xD7A3),  # Hangul Syllables
    (0xF900, 0xFAFF),  # CJK Compatibility Ideographs
    (0xFF01, 0xFF60),  # Fullwidth Forms (，：；！？（） 등)
    (0xFFE0, 0xFFE6),  # Fullwidth Signs
)


def strip_style(text: str) -> str:
    """스타일 이스케이프 시퀀스 제거 (보이는 텍스트는 그대로)."""
    return _STYLE_ESCAPE_RE.sub("", text)


def is_wide(char: str) -> bool:
    """단일 코드 포인트가 2컬럼 문자인지."""
    code = ord(char)
    for start, end in WIDE_RANGES:
        if code < start:
            return False
        if code <= end:
            return True
    return False


def display_width(text: str) -> int:
    """
    문자열의 터미널 표시 폭.

    Args:
        text: 스타일 이스케이프가 포함될 수 있는 문자열

    Returns:
        컬럼 수 (항상 코드 포인트 수 이상)
    """
    return sum(2 if is_wide(c) else 1 for c in strip_style(text))


def pad_to_width(text: str, width: int) -> str:
    """
    표시 폭이 width가 되도록 오른쪽에 공백 추가.

    이미 width 이상이면 그대로 반환 (자르지 않음).
    """
    return text + " " * max(0, width - display_width(text))
