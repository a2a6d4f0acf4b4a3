"""
데이터 저장소 상태 스냅샷 수집.

계약:
- collect()는 절대 raise하지 않음 (실패는 StatusRecord에 기록)
- 테이블별 count 실패는 해당 테이블에만 COUNT_FAILED로 기록
  (다른 테이블 결과/전체 연결 상태에 영향 없음)
- 연결 실패 시 connected=False + error, 테이블 통계 없음
- 이전 스냅샷을 보관/수정하지 않음 (매번 새 StatusRecord)
"""

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Sequence

from src.domain.errors import ErrorCodes, sanitize_error_message
from src.domain.schemas import Connectivity, EntityStat, StatusRecord

logger = logging.getLogger(__name__)


# =============================================================================
# Collaborator Interface
# =============================================================================

class StatusSource(ABC):
    """
    상태 정보 제공자 추상 인터페이스.

    구현체: SQLiteStatusSource (src/core/database.py), 테스트용 fake
    """

    @abstractmethod
    async def get_connectivity(self) -> Connectivity:
        """
        연결 확인.

        실패도 예외 대신 Connectivity(connected=False, error=...)로 보고.
        """
        ...

    @abstractmethod
    def list_entities(self) -> Sequence[str] | Awaitable[Sequence[str]]:
        """
        알려진 엔티티(테이블) 이름 목록.

        동기/비동기 모두 허용. 모르면 빈 목록.
        """
        ...

    @abstractmethod
    async def count_entity(self, name: str) -> int:
        """
        엔티티 레코드 수.

        실패 시 예외 발생 가능 (호출자가 처리).
        """
        ...


# =============================================================================
# Snapshot
# =============================================================================

class StatusSnapshot:
    """
    StatusSource → StatusRecord.

    Usage:
        snapshot = StatusSnapshot(source)
        record = await snapshot.collect()
    """

    def __init__(self, source: StatusSource, redact_errors: bool = False):
        """
        Args:
            source: 상태 정보 제공자
            redact_errors: 에러 메시지에 sanitize_error_message 적용 여부
        """
        self.source = source
        self.redact_errors = redact_errors

    def _error_text(self, error: BaseException | str | None) -> str:
        text = str(error) if error is not None else ""
        if self.redact_errors:
            return sanitize_error_message(text)
        return text or "未知错误"

    async def _connectivity(self) -> Connectivity:
        try:
            return await self.source.get_connectivity()
        except Exception as e:
            # 계약 위반 (raise 금지) 이지만 스냅샷은 계속 만들어야 함
            logger.warning(f"get_connectivity raised instead of reporting: {e!r}")
            return Connectivity(connected=False, error=str(e))

    async def _entity_names(self) -> list[str]:
        result = self.source.list_entities()
        if inspect.isawaitable(result):
            result = await result
        return list(result or [])

    async def _count(self, name: str) -> EntityStat:
        try:
            count = int(await self.source.count_entity(name))
        except Exception as e:
            logger.warning(
                f"[{ErrorCodes.ENTITY_COUNT_FAILED}] entity={name!r} error={e!r}"
            )
            return EntityStat(name=name, count=None, error=self._error_text(e))
        return EntityStat(name=name, count=count)

    async def collect(self) -> StatusRecord:
        """
        현재 시점 상태 수집.

        Returns:
            StatusRecord (항상 반환, raise 없음)
        """
        conn = await self._connectivity()
        if not conn.connected:
            logger.warning(
                f"[{ErrorCodes.DB_CONNECT_FAILED}] host={conn.host!r} error={conn.error!r}"
            )
            return StatusRecord(
                connected=False,
                host=conn.host,
                database=conn.database,
                error=self._error_text(conn.error),
            )

        try:
            names = await self._entity_names()
        except Exception as e:
            logger.warning(f"list_entities failed: {e!r}")
            return StatusRecord(
                connected=True,
                host=conn.host,
                database=conn.database,
                error=self._error_text(e),
            )

        # 테이블별 count 동시 실행, 순서는 names 순서 유지
        stats = await asyncio.gather(*(self._count(name) for name in names))

        return StatusRecord(
            connected=True,
            host=conn.host,
            database=conn.database,
            entities=tuple(stats),
        )
