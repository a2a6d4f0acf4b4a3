"""
SQLite 데이터 저장소 상태 제공자.

StatusSource 구현:
- get_connectivity(): SELECT 1 (재시도 포함), 실패해도 raise 없이 결과로 보고
- list_entities(): sqlite_master의 사용자 테이블 목록
- count_entity(): SELECT COUNT(*) (실패 시 raise → StatusSnapshot이 처리)

sqlite3 호출은 블로킹이므로 asyncio.to_thread로 실행.
"""

import asyncio
import logging
import sqlite3
import threading
from pathlib import Path

from src.core.config import DatabaseSettings
from src.domain.errors import ErrorCodes
from src.domain.schemas import Connectivity
from src.startup.snapshot import StatusSource
from src.utils.retry import retry_async

logger = logging.getLogger(__name__)

LOCAL_HOST = "localhost"


def _quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


class SQLiteStatusSource(StatusSource):
    """
    SQLite 파일 기반 StatusSource.

    Usage:
        source = SQLiteStatusSource(Path("data/app.db"))
        record = await StatusSnapshot(source).collect()
    """

    def __init__(
        self,
        path: Path,
        connect_retries: int = 3,
        retry_delay: float = 1.0,
        create: bool = False,
    ):
        """
        Args:
            path: DB 파일 경로
            connect_retries: 연결 확인 재시도 횟수
            retry_delay: 재시도 간격(초)
            create: 파일이 없을 때 생성 허용 (False면 읽기/쓰기 모드로만 열기)
        """
        self.path = Path(path)
        self.connect_retries = connect_retries
        self.retry_delay = retry_delay
        self.create = create
        self._conn: sqlite3.Connection | None = None
        # 하나의 연결을 여러 to_thread 워커가 공유
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> "SQLiteStatusSource":
        return cls(
            Path(settings.path),
            connect_retries=settings.connect_retries,
            retry_delay=settings.retry_delay,
        )

    @property
    def database_name(self) -> str:
        return self.path.stem

    def _connect(self) -> sqlite3.Connection:
        if self._conn is None:
            mode = "rwc" if self.create else "rw"
            self._conn = sqlite3.connect(
                f"file:{self.path}?mode={mode}", uri=True, check_same_thread=False
            )
        return self._conn

    def _ping(self) -> None:
        with self._lock:
            self._connect().execute("SELECT 1").fetchone()

    def _table_names(self) -> list[str]:
        with self._lock:
            rows = self._connect().execute(
                "SELECT name FROM sqlite_master "
                "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
            ).fetchall()
        return [row[0] for row in rows]

    def _count(self, name: str) -> int:
        with self._lock:
            row = self._connect().execute(
                f"SELECT COUNT(*) FROM {_quote_identifier(name)}"
            ).fetchone()
        return int(row[0])

    # =========================================================================
    # StatusSource
    # =========================================================================

    async def get_connectivity(self) -> Connectivity:
        try:
            await retry_async(
                asyncio.to_thread,
                self._ping,
                max_retries=self.connect_retries,
                delay=self.retry_delay,
                should_retry=lambda e: isinstance(e, sqlite3.OperationalError),
            )
        except sqlite3.Error as e:
            logger.error(f"[{ErrorCodes.DB_CONNECT_FAILED}] path={self.path}: {e}")
            self.close()
            return Connectivity(
                connected=False,
                host=LOCAL_HOST,
                database=self.database_name,
                error=str(e),
            )
        return Connectivity(connected=True, host=LOCAL_HOST, database=self.database_name)

    async def list_entities(self) -> list[str]:
        return await asyncio.to_thread(self._table_names)

    async def count_entity(self, name: str) -> int:
        return await asyncio.to_thread(self._count, name)

    def close(self) -> None:
        with self._lock:
            if self._conn is None:
                return
            self._conn.close()
            self._conn = None
            logger.info("database connection closed")
