"""
Core layer: 설정, 로깅, 데이터 저장소.

역할:
- config: default.yaml + .env + 환경변수 → Settings
- log_setup: logging.basicConfig (대시보드 사용 시 파일로)
- database: SQLite 기반 StatusSource
"""

from .config import Settings, load_config, load_settings
from .database import SQLiteStatusSource
from .log_setup import configure_logging

__all__ = [
    # config
    "Settings",
    "load_config",
    "load_settings",
    # log_setup
    "configure_logging",
    # database
    "SQLiteStatusSource",
]
