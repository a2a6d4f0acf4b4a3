"""
Error definitions for the status dashboard.

에러 분류:
- 스냅샷 수집 에러 (연결 실패, 테이블 count 실패) → 예외 없이 렌더링 텍스트로만 표시
- 레이아웃 에러 (터미널 폭 조회 불가 등) → DashboardError로 start() 호출자에게 전파
- 타이머 콜백 에러 → 잡지 않음 (이벤트 루프 exception handler로 전파)
"""

import re
from typing import Any


class DashboardError(Exception):
    """
    대시보드 렌더링을 계속할 수 없을 때 발생하는 에러.

    Usage:
        raise DashboardError("TERMINAL_WIDTH_UNAVAILABLE", stream="stdout", cause=str(e))
    """

    def __init__(self, code: str, **context: Any) -> None:
        self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **self.context,
        }


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Layout (start() 호출자에게 전파) ===
    TERMINAL_WIDTH_UNAVAILABLE = "TERMINAL_WIDTH_UNAVAILABLE"

    # === Session ===
    SESSION_NOT_IDLE = "SESSION_NOT_IDLE"

    # === Config ===
    CONFIG_INVALID = "CONFIG_INVALID"

    # === Snapshot (렌더링 텍스트로만 표시, raise 금지) ===
    DB_CONNECT_FAILED = "DB_CONNECT_FAILED"
    ENTITY_COUNT_FAILED = "ENTITY_COUNT_FAILED"


# =============================================================================
# Message Sanitization
# =============================================================================

# (패턴, 치환 문자열) - 순서대로 적용
_SENSITIVE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\b\d{4}-\d{4}-\d{4}-\d{4}\b"), "****-****-****-****"),  # 카드번호
    (
        re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"),
        "****@****.***",
    ),  # 이메일
    (re.compile(r"\b\d{11}\b"), "*****"),  # 휴대폰 번호
    (re.compile(r"password[:=]\s*['\"][^'\"]*['\"]", re.IGNORECASE), 'password: "****"'),
    (re.compile(r"secret[:=]\s*['\"][^'\"]*['\"]", re.IGNORECASE), 'secret: "****"'),
]


def sanitize_error_message(message: str | None) -> str:
    """
    에러 메시지에서 민감 정보 마스킹.

    터미널/응답에 노출되기 전에 적용:
    - 카드번호, 이메일, 11자리 휴대폰 번호
    - password=/secret= 따옴표 값

    Args:
        message: 원본 메시지 (None/빈 문자열 허용)

    Returns:
        마스킹된 메시지 (비어 있으면 "未知错误")
    """
    if not message:
        return "未知错误"

    sanitized = message
    for pattern, replacement in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized
