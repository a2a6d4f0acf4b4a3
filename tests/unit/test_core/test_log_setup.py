"""
test_log_setup.py - 로깅 설정 테스트

대시보드가 켜져 있으면 로그 파일, 꺼져 있으면 터미널.
"""

import logging
from pathlib import Path

import pytest

from src.core.config import Settings
from src.core.log_setup import configure_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    """basicConfig(force=True)로 바뀐 root 핸들러 복원."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


class TestConfigureLogging:
    """configure_logging 함수 테스트."""

    def test_file_logging_when_dashboard_enabled(self, tmp_path: Path):
        settings = Settings()
        settings.logging.file = str(tmp_path / "logs" / "app.log")

        log_path = configure_logging(settings)
        logging.getLogger("src.test").warning("hello file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_path == tmp_path / "logs" / "app.log"
        assert "hello file" in log_path.read_text(encoding="utf-8")

    def test_stream_logging_when_dashboard_disabled(self, tmp_path: Path):
        settings = Settings()
        settings.dashboard.enabled = False
        settings.logging.file = str(tmp_path / "app.log")

        assert configure_logging(settings) is None
        assert not (tmp_path / "app.log").exists()

    def test_level_applied(self):
        settings = Settings()
        settings.dashboard.enabled = False
        settings.logging.level = "DEBUG"

        configure_logging(settings)

        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        settings = Settings()
        settings.dashboard.enabled = False
        settings.logging.level = "CHATTY"

        configure_logging(settings)

        assert logging.getLogger().level == logging.INFO
