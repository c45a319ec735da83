"""
Audit log port: a narrow, write-only sink for forensic records.

Implementations must never raise into the caller; a failed append is
reported through the application log and dropped.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Protocol


class AuditStream(str, Enum):
    """Named append-only streams, one per event category."""

    ORDER_REQUEST = "order_request"
    ORDER_RESPONSE = "order_response"
    ORDER_ERROR = "order_error"
    CALLBACK_REQUEST = "callback_request"
    CALLBACK_ERROR = "callback_error"
    CALLBACK_COMPLETE = "callback_complete"


class AuditLogPort(Protocol):
    async def record(self, stream: AuditStream, payload: Mapping[str, Any]) -> None: ...


__all__ = ["AuditStream", "AuditLogPort"]
