"""
프로세스 로깅 설정.

대시보드가 켜져 있으면 로그를 파일로 보낸다
(터미널에 섞이면 in-place 재렌더링이 깨짐).
"""

import logging
from pathlib import Path

from src.core.config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(settings: Settings) -> Path | None:
    """
    logging.basicConfig 설정.

    Args:
        settings: 로드된 설정

    Returns:
        로그 파일 경로 (터미널 출력이면 None)
    """
    level = getattr(logging, settings.logging.level, logging.INFO)

    log_path: Path | None = None
    if settings.dashboard.enabled and settings.logging.file:
        log_path = Path(settings.logging.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

    if log_path is not None:
        logging.basicConfig(
            level=level,
            format=LOG_FORMAT,
            datefmt=LOG_DATEFMT,
            filename=str(log_path),
            encoding="utf-8",
            force=True,
        )
    else:
        logging.basicConfig(
            level=level,
            format=LOG_FORMAT,
            datefmt=LOG_DATEFMT,
            force=True,
        )
    return log_path
