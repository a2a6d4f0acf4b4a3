"""Domain layer: errors and schemas."""

from .errors import DashboardError, ErrorCodes, sanitize_error_message
from .schemas import (
    COUNT_FAILED,
    Connectivity,
    EntityStat,
    ServerInfo,
    StatusRecord,
)

__all__ = [
    "DashboardError",
    "ErrorCodes",
    "sanitize_error_message",
    "COUNT_FAILED",
    "Connectivity",
    "EntityStat",
    "ServerInfo",
    "StatusRecord",
]
