"""
터미널 출력 추상화.

필요 기능:
- 스타일 텍스트 쓰기 (stdout)
- 화면 지우기 (첫 렌더링, 리사이즈)
- 커서 N줄 위로 (in-place 재렌더링)
- 터미널 폭 조회 (실패 = 레이아웃 에러)
- 리사이즈 알림 구독 (SIGWINCH)
"""

import asyncio
import logging
import os
import signal
import sys
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TextIO

from src.domain.errors import DashboardError, ErrorCodes

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\x1b[H\x1b[2J"
ERASE_BELOW = "\x1b[J"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"


def cursor_up(n: int) -> str:
    return f"\x1b[{n}A" if n > 0 else ""


class Terminal(ABC):
    """렌더링 대상 터미널."""

    @abstractmethod
    def write(self, text: str) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        """화면 전체 지우기 + 커서 홈."""
        ...

    @abstractmethod
    def move_up(self, lines: int) -> None:
        ...

    @abstractmethod
    def columns(self) -> int:
        """
        현재 터미널 폭.

        Raises:
            DashboardError: TERMINAL_WIDTH_UNAVAILABLE
        """
        ...

    @abstractmethod
    def subscribe_resize(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        리사이즈 알림 구독.

        Returns:
            구독 해제 함수 (여러 번 호출해도 안전)
        """
        ...


class StreamTerminal(Terminal):
    """
    실제 출력 스트림(기본 sys.stdout) 기반 Terminal.

    리사이즈는 실행 중인 이벤트 루프의 SIGWINCH 핸들러로 감지.
    SIGWINCH가 없는 플랫폼(Windows)에서는 구독이 no-op.
    """

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdout

    def write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def clear(self) -> None:
        self.write(CLEAR_SCREEN)

    def move_up(self, lines: int) -> None:
        self.write(cursor_up(lines))

    def columns(self) -> int:
        try:
            return os.get_terminal_size(self.stream.fileno()).columns
        except (AttributeError, ValueError, OSError) as e:
            env_columns = os.environ.get("COLUMNS", "")
            if env_columns.isdigit() and int(env_columns) > 0:
                return int(env_columns)
            raise DashboardError(
                ErrorCodes.TERMINAL_WIDTH_UNAVAILABLE,
                stream=getattr(self.stream, "name", repr(self.stream)),
                cause=str(e),
            ) from e

    def subscribe_resize(self, callback: Callable[[], None]) -> Callable[[], None]:
        sigwinch = getattr(signal, "SIGWINCH", None)
        if sigwinch is None:
            logger.debug("SIGWINCH not available; resize events disabled")
            return lambda: None

        loop = asyncio.get_running_loop()
        try:
            loop.add_signal_handler(sigwinch, callback)
        except (NotImplementedError, RuntimeError, ValueError) as e:
            # 메인 스레드가 아니거나 루프가 시그널 핸들러를 지원하지 않음
            logger.debug(f"resize events disabled: {e}")
            return lambda: None
        subscribed = True

        def unsubscribe() -> None:
            nonlocal subscribed
            if subscribed:
                subscribed = False
                loop.remove_signal_handler(sigwinch)

        return unsubscribe
