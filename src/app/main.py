"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uv run uvicorn src.app.main:app --reload
- 프로덕션: uv run uvicorn src.app.main:app

시작 시 터미널 상태 대시보드를 표시 (dashboard.enabled=false 또는
DASHBOARD_ENABLED=false로 끔).
"""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager, suppress
from typing import Any

from fastapi import FastAPI

from src.app.dashboard import StartupDashboard

# Routes
from src.app.routes import status
from src.core.config import load_settings
from src.core.database import SQLiteStatusSource
from src.core.log_setup import configure_logging

API_PREFIX = "/api/v1"


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: 설정 로드, 로깅 설정, 데이터 저장소 준비, 대시보드 시작
    종료 시: 대시보드 정지, 데이터 저장소 연결 종료
    """
    # Startup
    settings = load_settings()
    configure_logging(settings)
    source = SQLiteStatusSource.from_settings(settings.database)

    app.state.settings = settings
    app.state.status_source = source

    dashboard: StartupDashboard | None = None
    start_task: asyncio.Task[None] | None = None
    if settings.dashboard.enabled:
        dashboard = StartupDashboard(settings, source)
        start_task = dashboard.start_in_background()

    yield

    # Shutdown
    if start_task is not None and not start_task.done():
        start_task.cancel()
        with suppress(asyncio.CancelledError):
            await start_task

    if dashboard is not None:
        dashboard.shutdown(close=source.close)
    else:
        source.close()


# =============================================================================
# App Instance
# =============================================================================

app = FastAPI(
    title="School Admin API",
    description="学校管理系统后端 API",
    version="0.1.0",
    lifespan=lifespan,
)

# =============================================================================
# Routes
# =============================================================================

app.include_router(status.api_router, prefix=f"{API_PREFIX}/status", tags=["Status API"])


# =============================================================================
# Root Endpoints
# =============================================================================


@app.get("/")
async def root() -> dict[str, Any]:
    """서비스 정보."""
    return {
        "message": "School Admin API",
        "endpoints": {
            "status": f"{API_PREFIX}/status",
            "docs": "/docs",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """헬스 체크."""
    return {"status": "ok"}


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    _settings = load_settings()
    uvicorn.run(
        "src.app.main:app",
        host=_settings.server.host,
        port=_settings.server.port,
        log_level="warning",
    )
