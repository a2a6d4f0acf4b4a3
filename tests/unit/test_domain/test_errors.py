"""
test_errors.py - DashboardError / 에러 메시지 마스킹 테스트
"""

import pytest

from src.domain.errors import DashboardError, ErrorCodes, sanitize_error_message

# =============================================================================
# DashboardError 테스트
# =============================================================================


class TestDashboardError:
    """DashboardError 테스트."""

    def test_message_with_context(self):
        error = DashboardError(ErrorCodes.TERMINAL_WIDTH_UNAVAILABLE, stream="stdout")

        assert str(error) == "[TERMINAL_WIDTH_UNAVAILABLE] stream='stdout'"
        assert error.code == ErrorCodes.TERMINAL_WIDTH_UNAVAILABLE

    def test_message_without_context(self):
        assert str(DashboardError(ErrorCodes.SESSION_NOT_IDLE)) == "[SESSION_NOT_IDLE]"

    def test_to_dict(self):
        error = DashboardError(ErrorCodes.CONFIG_INVALID, key="server.port", value="x")

        assert error.to_dict() == {
            "code": "CONFIG_INVALID",
            "key": "server.port",
            "value": "x",
        }

    def test_is_exception(self):
        with pytest.raises(Exception):
            raise DashboardError(ErrorCodes.SESSION_NOT_IDLE)


# =============================================================================
# sanitize_error_message 테스트
# =============================================================================


class TestSanitizeErrorMessage:
    """sanitize_error_message 함수 테스트."""

    @pytest.mark.parametrize("message", [None, ""])
    def test_empty_message(self, message):
        assert sanitize_error_message(message) == "未知错误"

    def test_plain_message_unchanged(self):
        assert sanitize_error_message("connection refused") == "connection refused"

    def test_card_number(self):
        result = sanitize_error_message("card 1234-5678-9012-3456 declined")

        assert result == "card ****-****-****-**** declined"

    def test_email(self):
        result = sanitize_error_message("no user staff@school.edu")

        assert result == "no user ****@****.***"

    def test_phone_number(self):
        assert sanitize_error_message("call 13812345678") == "call *****"

    def test_phone_requires_exact_length(self):
        assert sanitize_error_message("id 123456789012") == "id 123456789012"

    @pytest.mark.parametrize(
        "message, expected",
        [
            ('password="hunter2"', 'password: "****"'),
            ("Password: 'abc'", 'password: "****"'),
            ('secret="s3"', 'secret: "****"'),
        ],
    )
    def test_credentials(self, message: str, expected: str):
        assert sanitize_error_message(message) == expected
