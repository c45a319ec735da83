"""In-memory implementation of AuditLogPort.

Single-process only. Useful for local dev and tests.
"""
from __future__ import annotations

from typing import Any, Mapping

from application.ports.audit_log import AuditLogPort, AuditStream


class InMemoryAuditLog(AuditLogPort):
    def __init__(self) -> None:
        self.records: list[tuple[AuditStream, dict[str, Any]]] = []

    async def record(self, stream: AuditStream, payload: Mapping[str, Any]) -> None:  # type: ignore[override]
        self.records.append((stream, dict(payload)))

    def stream(self, stream: AuditStream) -> list[dict[str, Any]]:
        return [payload for s, payload in self.records if s is stream]

    def clear(self) -> None:
        self.records.clear()
