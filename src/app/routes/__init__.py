"""
FastAPI Routes.

API 라우트 (REST)
"""

from . import status

__all__ = ["status"]
