#!/usr/bin/env python3
"""
show_dashboard.py - 서버 없이 터미널 상태 대시보드만 실행

default.yaml / .env 설정을 사용하고, Ctrl+C(SIGINT) 또는 SIGTERM으로 종료.

사용법:
    # 기본 실행 (설정의 DB 경로)
    uv run python scripts/show_dashboard.py

    # 특정 DB + 샘플 테이블 생성
    uv run python scripts/show_dashboard.py --db /tmp/demo.db --sample

    # 깜빡임보다 정확성 우선 (매 tick 전체 지우기)
    uv run python scripts/show_dashboard.py --redraw full
"""

import argparse
import asyncio
import signal
import sqlite3
import sys
from pathlib import Path
from typing import Any

# 프로젝트 루트를 path에 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.app.dashboard import StartupDashboard  # noqa: E402
from src.core.config import load_settings  # noqa: E402
from src.core.database import SQLiteStatusSource  # noqa: E402
from src.core.log_setup import configure_logging  # noqa: E402
from src.startup import show_error  # noqa: E402

SAMPLE_TABLES: dict[str, int] = {
    "users": 42,
    "roles": 3,
    "classes": 12,
}


def create_sample_db(path: Path) -> None:
    """샘플 테이블/레코드 생성 (이미 있으면 건너뜀)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    try:
        with conn:
            for table, rows in SAMPLE_TABLES.items():
                conn.execute(
                    f'CREATE TABLE IF NOT EXISTS "{table}" (id INTEGER PRIMARY KEY, name TEXT)'
                )
                (existing,) = conn.execute(f'SELECT COUNT(*) FROM "{table}"').fetchone()
                conn.executemany(
                    f'INSERT INTO "{table}" (name) VALUES (?)',
                    [(f"{table}-{i}",) for i in range(existing, rows)],
                )
    finally:
        conn.close()


async def run(args: argparse.Namespace) -> int:
    settings = load_settings()
    if args.db:
        settings.database.path = args.db
    if args.redraw:
        settings.dashboard.redraw = args.redraw
    if args.no_animation:
        settings.dashboard.startup_animation_seconds = 0
    configure_logging(settings)

    db_path = Path(settings.database.path)
    if args.sample:
        create_sample_db(db_path)

    source = SQLiteStatusSource.from_settings(settings.database)
    dashboard = StartupDashboard(settings, source)

    loop = asyncio.get_running_loop()
    stopped = asyncio.Event()

    def request_stop() -> None:
        # SIGINT/SIGTERM 어느 쪽이 먼저 와도 한 번만 처리
        dashboard.stop()
        stopped.set()

    def handle_loop_error(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
        error = context.get("exception") or RuntimeError(context.get("message", "unknown"))
        dashboard.stop()
        show_error(dashboard.terminal, dashboard.theme, "未捕获的异常", error)
        stopped.set()

    loop.set_exception_handler(handle_loop_error)
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, request_stop)

    try:
        await dashboard.start()
    except Exception as e:
        show_error(dashboard.terminal, dashboard.theme, "启动信息显示失败", e)
        source.close()
        return 1

    await stopped.wait()

    try:
        dashboard.shutdown(close=source.close)
    except Exception:
        return 1
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="터미널 상태 대시보드 실행")
    parser.add_argument("--db", help="SQLite DB 경로 (기본: 설정 database.path)")
    parser.add_argument("--sample", action="store_true", help="샘플 테이블 생성")
    parser.add_argument(
        "--redraw", choices=["in_place", "full"], help="tick 재렌더링 방식"
    )
    parser.add_argument(
        "--no-animation", action="store_true", help="시작 진행 바 생략"
    )
    args = parser.parse_args()

    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
