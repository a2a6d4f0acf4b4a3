"""
test_app_lifespan.py - 애플리케이션 생명주기 통합 테스트

실제 SQLite 파일 + lifespan (대시보드 비활성화) 으로
/api/v1/status, /health 응답 확인.
"""

import sqlite3
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.app.main import app


@pytest.fixture
def sample_db(tmp_path: Path) -> Path:
    path = tmp_path / "school_admin.db"
    conn = sqlite3.connect(path)
    try:
        with conn:
            conn.execute("CREATE TABLE users (id INTEGER PRIMARY KEY)")
            conn.executemany("INSERT INTO users VALUES (?)", [(1,), (2,)])
    finally:
        conn.close()
    return path


@pytest.fixture
def client(sample_db: Path, monkeypatch: pytest.MonkeyPatch):
    """대시보드 끄고 샘플 DB로 앱 실행."""
    monkeypatch.setenv("DASHBOARD_ENABLED", "false")
    monkeypatch.setenv("DB_PATH", str(sample_db))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    with TestClient(app) as client:
        yield client


class TestAppLifespan:
    """lifespan + 라우트 통합 테스트."""

    def test_health(self, client: TestClient):
        assert client.get("/health").json() == {"status": "ok"}

    def test_root_lists_endpoints(self, client: TestClient):
        data = client.get("/").json()

        assert data["endpoints"]["status"] == "/api/v1/status"

    def test_status_from_sqlite(self, client: TestClient):
        data = client.get("/api/v1/status").json()

        assert data["connected"] is True
        assert data["database"] == "school_admin"
        assert data["entities"] == [{"name": "users", "count": 2}]

    def test_source_closed_on_shutdown(self, sample_db: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DASHBOARD_ENABLED", "false")
        monkeypatch.setenv("DB_PATH", str(sample_db))

        with TestClient(app) as client:
            client.get("/api/v1/status")
            source = client.app.state.status_source

        assert source._conn is None
