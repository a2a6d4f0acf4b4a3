"""
Status Routes: 데이터 저장소 상태 조회.

- GET /api/v1/status → StatusRecord (요청마다 새로 수집)
"""

from typing import Any

from fastapi import APIRouter, Request

from src.startup.snapshot import StatusSnapshot

api_router = APIRouter()


@api_router.get("")
async def get_status(request: Request) -> dict[str, Any]:
    """
    현재 상태 스냅샷.

    연결 실패도 200 + connected=false로 응답 (collect()는 raise하지 않음).
    """
    settings = request.app.state.settings
    snapshot = StatusSnapshot(
        request.app.state.status_source,
        redact_errors=settings.dashboard.redact_errors,
    )
    record = await snapshot.collect()
    return record.to_dict()
