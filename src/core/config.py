"""
설정 로드: default.yaml + .env + 환경변수

우선순위: 환경변수 > .env > default.yaml > 코드 기본값
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from src.domain.constants import (
    DEFAULT_CONFIG_FILENAME,
    DEFAULT_PANEL_WIDTH,
    DEFAULT_TICK_INTERVAL_MS,
    ENV_DEVELOPMENT,
    STARTUP_ANIMATION_SECONDS,
)
from src.domain.errors import DashboardError, ErrorCodes

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent

REDRAW_MODES = ("in_place", "full")
COLOR_MODES = ("auto", "always", "never")

_TRUE_VALUES = ("1", "true", "yes", "on")

# =============================================================================
# Settings
# =============================================================================


@dataclass
class ServerSettings:
    host: str = "localhost"
    port: int = 3000
    env: str = ENV_DEVELOPMENT


@dataclass
class DatabaseSettings:
    """SQLite 데이터 저장소 설정."""
    path: str = "data/school_admin.db"
    connect_retries: int = 3
    retry_delay: float = 1.0


@dataclass
class DashboardSettings:
    """터미널 상태 패널 설정."""
    enabled: bool = True
    width: int = DEFAULT_PANEL_WIDTH
    interval_ms: int = DEFAULT_TICK_INTERVAL_MS
    redraw: str = "in_place"  # in_place, full
    color: str = "auto"  # auto, always, never
    redact_errors: bool = True
    startup_animation_seconds: float = STARTUP_ANIMATION_SECONDS


@dataclass
class LoggingSettings:
    level: str = "INFO"
    file: str | None = "logs/app.log"


@dataclass
class FeatureFlags:
    """개발 모드 패널에 표시되는 플래그."""
    db_sync_alter: bool = False
    db_sync_force: bool = False
    enable_api_docs: bool = True
    enable_request_log: bool = False

    def to_dict(self) -> dict[str, bool]:
        return {
            "db_sync_alter": self.db_sync_alter,
            "db_sync_force": self.db_sync_force,
            "enable_api_docs": self.enable_api_docs,
            "enable_request_log": self.enable_request_log,
        }


@dataclass
class Settings:
    server: ServerSettings = field(default_factory=ServerSettings)
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    dashboard: DashboardSettings = field(default_factory=DashboardSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    features: FeatureFlags = field(default_factory=FeatureFlags)


# =============================================================================
# Loading
# =============================================================================


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드 (없으면 빈 dict)."""
    if config_path is None:
        config_path = PROJECT_ROOT / DEFAULT_CONFIG_FILENAME

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _as_int(key: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise DashboardError(ErrorCodes.CONFIG_INVALID, key=key, value=value) from e


def _as_float(key: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise DashboardError(ErrorCodes.CONFIG_INVALID, key=key, value=value) from e


def _choice(key: str, value: Any, choices: tuple[str, ...]) -> str:
    value = str(value).lower()
    if value not in choices:
        raise DashboardError(
            ErrorCodes.CONFIG_INVALID, key=key, value=value, allowed=list(choices)
        )
    return value


# 환경변수 → (섹션, 키)
_ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "APP_ENV": ("server", "env"),
    "HOST": ("server", "host"),
    "PORT": ("server", "port"),
    "DB_PATH": ("database", "path"),
    "DB_SYNC_ALTER": ("features", "db_sync_alter"),
    "DB_SYNC_FORCE": ("features", "db_sync_force"),
    "ENABLE_API_DOCS": ("features", "enable_api_docs"),
    "ENABLE_REQUEST_LOG": ("features", "enable_request_log"),
    "DASHBOARD_ENABLED": ("dashboard", "enabled"),
    "DASHBOARD_COLOR": ("dashboard", "color"),
    "LOG_LEVEL": ("logging", "level"),
    "LOG_FILE": ("logging", "file"),
}


def _apply_env(raw: dict[str, Any], environ: dict[str, str]) -> dict[str, Any]:
    merged = {section: dict(values or {}) for section, values in raw.items()}
    for env_key, (section, key) in _ENV_OVERRIDES.items():
        if env_key in environ:
            merged.setdefault(section, {})[key] = environ[env_key]
    return merged


def build_settings(raw: dict[str, Any]) -> Settings:
    """
    dict → Settings (타입 변환 + 검증).

    Raises:
        DashboardError: CONFIG_INVALID
    """
    server = raw.get("server") or {}
    database = raw.get("database") or {}
    dashboard = raw.get("dashboard") or {}
    log = raw.get("logging") or {}
    features = raw.get("features") or {}

    defaults = Settings()
    log_file = log.get("file", defaults.logging.file)

    return Settings(
        server=ServerSettings(
            host=str(server.get("host", defaults.server.host)),
            port=_as_int("server.port", server.get("port", defaults.server.port)),
            env=str(server.get("env", defaults.server.env)),
        ),
        database=DatabaseSettings(
            path=str(database.get("path", defaults.database.path)),
            connect_retries=_as_int(
                "database.connect_retries",
                database.get("connect_retries", defaults.database.connect_retries),
            ),
            retry_delay=_as_float(
                "database.retry_delay",
                database.get("retry_delay", defaults.database.retry_delay),
            ),
        ),
        dashboard=DashboardSettings(
            enabled=_as_bool(dashboard.get("enabled", defaults.dashboard.enabled)),
            width=_as_int("dashboard.width", dashboard.get("width", defaults.dashboard.width)),
            interval_ms=_as_int(
                "dashboard.interval_ms",
                dashboard.get("interval_ms", defaults.dashboard.interval_ms),
            ),
            redraw=_choice(
                "dashboard.redraw", dashboard.get("redraw", defaults.dashboard.redraw),
                REDRAW_MODES,
            ),
            color=_choice(
                "dashboard.color", dashboard.get("color", defaults.dashboard.color),
                COLOR_MODES,
            ),
            redact_errors=_as_bool(
                dashboard.get("redact_errors", defaults.dashboard.redact_errors)
            ),
            startup_animation_seconds=_as_float(
                "dashboard.startup_animation_seconds",
                dashboard.get(
                    "startup_animation_seconds",
                    defaults.dashboard.startup_animation_seconds,
                ),
            ),
        ),
        logging=LoggingSettings(
            level=str(log.get("level", defaults.logging.level)).upper(),
            file=str(log_file) if log_file else None,
        ),
        features=FeatureFlags(
            db_sync_alter=_as_bool(features.get("db_sync_alter", False)),
            db_sync_force=_as_bool(features.get("db_sync_force", False)),
            enable_api_docs=_as_bool(features.get("enable_api_docs", True)),
            enable_request_log=_as_bool(features.get("enable_request_log", False)),
        ),
    )


def load_settings(
    config_path: Path | None = None,
    environ: dict[str, str] | None = None,
    load_env_file: bool = True,
) -> Settings:
    """
    설정 로드.

    Args:
        config_path: YAML 경로 (None이면 프로젝트 루트 default.yaml)
        environ: 환경변수 (None이면 os.environ)
        load_env_file: .env 파일 로드 여부

    Returns:
        Settings

    Raises:
        DashboardError: CONFIG_INVALID
    """
    if load_env_file:
        load_dotenv()
    env = dict(os.environ) if environ is None else environ

    raw = _apply_env(load_config(config_path), env)
    settings = build_settings(raw)
    logger.debug(
        f"settings loaded: env={settings.server.env} "
        f"dashboard={settings.dashboard.enabled} db={settings.database.path}"
    )
    return settings
