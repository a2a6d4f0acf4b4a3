"""
재시도 로직 유틸리티.

데이터 저장소 연결 확인 실패 시 고정 간격 재시도를 지원합니다.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _always(_: Exception) -> bool:
    return True


async def retry_async(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    max_retries: int = 3,
    delay: float = 1.0,
    should_retry: Callable[[Exception], bool] = _always,
    **kwargs: Any,
) -> T:
    """
    고정 간격 재시도.

    Args:
        func: 재시도할 비동기 함수
        *args: func에 전달할 위치 인자
        max_retries: 최대 재시도 횟수 (총 시도 = max_retries + 1)
        delay: 재시도 간 대기 시간(초)
        should_retry: 예외별 재시도 여부 (False면 즉시 raise)
        **kwargs: func에 전달할 키워드 인자

    Returns:
        func의 반환값

    Raises:
        마지막 시도에서 발생한 예외, 또는 재시도 불가 예외
    """
    for attempt in range(max_retries + 1):
        try:
            result = await func(*args, **kwargs)
            if attempt > 0:
                logger.info(
                    f"Retry succeeded on attempt {attempt + 1}/{max_retries + 1}"
                )
            return result

        except Exception as e:
            if not should_retry(e):
                raise
            if attempt == max_retries:
                logger.error(
                    f"All {max_retries + 1} attempts failed. Last error: {e}"
                )
                raise

            logger.warning(
                f"Attempt {attempt + 1}/{max_retries + 1} failed "
                f"({type(e).__name__}). Retrying in {delay:.1f}s..."
            )
            await asyncio.sleep(delay)

    # Should never reach here
    msg = "Unexpected retry logic error"
    raise RuntimeError(msg)
