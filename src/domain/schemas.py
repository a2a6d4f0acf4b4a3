"""
Data schemas for the status dashboard.

규칙:
- StatusRecord는 collect() 호출마다 새로 생성, 생성 후 변경 금지 (frozen)
- 테이블별 count 실패는 해당 EntityStat에만 기록 (다른 테이블/연결 상태에 영향 없음)
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

# count 실패 시 표시되는 마커
COUNT_FAILED = "count failed"


# =============================================================================
# Collaborator Results
# =============================================================================

@dataclass(frozen=True)
class Connectivity:
    """데이터 저장소 연결 확인 결과."""
    connected: bool
    host: str | None = None
    database: str | None = None
    error: str | None = None


# =============================================================================
# Snapshot Schemas
# =============================================================================

@dataclass(frozen=True)
class EntityStat:
    """
    테이블(엔티티)별 레코드 수.

    count가 None이면 count 실패 (error에 원인).
    """
    name: str
    count: int | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.count is None

    @property
    def value(self) -> int | str:
        """count 또는 실패 마커."""
        return COUNT_FAILED if self.count is None else self.count

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "count": self.value}


@dataclass(frozen=True)
class StatusRecord:
    """
    한 시점의 데이터 저장소 상태 스냅샷.

    connected=False이면 entities는 비어 있고 error에 원인 메시지.
    """
    connected: bool
    host: str | None = None
    database: str | None = None
    entities: tuple[EntityStat, ...] = ()
    error: str | None = None
    collected_at: str = field(
        default_factory=lambda: datetime.now(UTC).isoformat()
    )

    @property
    def entity_names(self) -> list[str]:
        return [e.name for e in self.entities]

    def to_dict(self) -> dict[str, Any]:
        """JSON 직렬화용."""
        return {
            "connected": self.connected,
            "host": self.host,
            "database": self.database,
            "entities": [e.to_dict() for e in self.entities],
            "error": self.error,
            "collected_at": self.collected_at,
        }


# =============================================================================
# Server Info
# =============================================================================

@dataclass(frozen=True)
class ServerInfo:
    """패널의 서버 정보 섹션에 표시되는 값."""
    host: str
    port: int
    env: str
    pid: int
    started_at: str
    python_version: str
    platform: str

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"
