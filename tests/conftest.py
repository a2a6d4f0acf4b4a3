"""
Pytest fixtures for the dashboard tests.

구성:
- FakeTerminal: 쓰기/화면 지우기/커서 이동 기록, 리사이즈 수동 발생
- FakeStatusSource: 연결 상태/테이블 count를 미리 지정 (실패는 Exception 인스턴스로)
"""

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
import yaml

from src.domain.errors import DashboardError, ErrorCodes
from src.domain.schemas import Connectivity, ServerInfo
from src.startup.snapshot import StatusSource
from src.startup.terminal import Terminal

# =============================================================================
# Fakes
# =============================================================================


class FakeTerminal(Terminal):
    """출력 내용을 메모리에 기록하는 Terminal."""

    def __init__(self, columns: int | None = 120):
        self._columns = columns
        self.events: list[tuple[str, object]] = []
        self.resize_callbacks: list[Callable[[], None]] = []
        self.unsubscribe_calls = 0

    # --- Terminal ---
    def write(self, text: str) -> None:
        self.events.append(("write", text))

    def clear(self) -> None:
        self.events.append(("clear", None))

    def move_up(self, lines: int) -> None:
        self.events.append(("up", lines))

    def columns(self) -> int:
        if self._columns is None:
            raise DashboardError(ErrorCodes.TERMINAL_WIDTH_UNAVAILABLE, stream="fake")
        return self._columns

    def subscribe_resize(self, callback: Callable[[], None]) -> Callable[[], None]:
        self.resize_callbacks.append(callback)

        def unsubscribe() -> None:
            self.unsubscribe_calls += 1
            if callback in self.resize_callbacks:
                self.resize_callbacks.remove(callback)

        return unsubscribe

    # --- helpers ---
    def trigger_resize(self) -> None:
        for callback in list(self.resize_callbacks):
            callback()

    @property
    def writes(self) -> list[str]:
        return [str(payload) for kind, payload in self.events if kind == "write"]

    @property
    def clears(self) -> int:
        return sum(1 for kind, _ in self.events if kind == "clear")

    @property
    def moves(self) -> list[int]:
        return [payload for kind, payload in self.events if kind == "up"]  # type: ignore[misc]

    @property
    def output(self) -> str:
        return "".join(self.writes)


class FakeStatusSource(StatusSource):
    """
    미리 지정된 결과를 돌려주는 StatusSource.

    counts 값이 Exception이면 count_entity에서 raise.
    """

    def __init__(
        self,
        connectivity: Connectivity | None = None,
        counts: dict[str, int | Exception] | None = None,
        entities: Sequence[str] | None = None,
    ):
        self.connectivity = connectivity or Connectivity(
            connected=True, host="db.local", database="school_admin"
        )
        self.counts = counts if counts is not None else {}
        self.entities = list(entities) if entities is not None else list(self.counts)
        self.connectivity_calls = 0
        self.count_calls: list[str] = []

    async def get_connectivity(self) -> Connectivity:
        self.connectivity_calls += 1
        return self.connectivity

    def list_entities(self) -> list[str]:
        return list(self.entities)

    async def count_entity(self, name: str) -> int:
        self.count_calls.append(name)
        value = self.counts[name]
        if isinstance(value, Exception):
            raise value
        return value


# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config(project_root: Path) -> dict:
    """default.yaml 로드."""
    with open(project_root / "default.yaml", encoding="utf-8") as f:
        return yaml.safe_load(f)


# =============================================================================
# Dashboard Fixtures
# =============================================================================


@pytest.fixture
def fake_terminal() -> FakeTerminal:
    return FakeTerminal()


@pytest.fixture
def fake_source() -> FakeStatusSource:
    """Users 42건, Orders 7건."""
    return FakeStatusSource(counts={"Users": 42, "Orders": 7})


@pytest.fixture
def server_info() -> ServerInfo:
    return ServerInfo(
        host="localhost",
        port=3000,
        env="development",
        pid=4242,
        started_at="2024-03-21 10:00:00",
        python_version="3.12.1",
        platform="linux",
    )
