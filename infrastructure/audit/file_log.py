"""Append-only JSON-lines audit log on the local file system.

One file per stream (`<base_dir>/<stream>.log`). Every record is serialized
to a single line and written with one `write()` on a file opened in append
mode, so concurrent requests interleave at record granularity only.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import aiofiles
import structlog

from application.ports.audit_log import AuditLogPort, AuditStream
from core.logging_config import get_logger


logger = get_logger(__name__)


def _utc_now_z() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def serialize_record(stream: AuditStream, payload: Mapping[str, Any]) -> str:
    """Render one audit record as a newline-terminated JSON line."""
    record: dict[str, Any] = {"stream": stream.value, "logged_at": _utc_now_z()}
    request_id = structlog.contextvars.get_contextvars().get("request_id")
    if request_id:
        record["request_id"] = request_id
    record.update(payload)
    # default=str keeps odd values (datetimes, Decimals) from dropping the record
    return json.dumps(record, ensure_ascii=False, default=str, separators=(",", ":")) + "\n"


class FileAuditLog(AuditLogPort):
    """File-backed audit sink; write failures are logged, never raised."""

    def __init__(self, base_dir: str | Path) -> None:
        self.base_dir = Path(base_dir).resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, stream: AuditStream) -> Path:
        return self.base_dir / f"{stream.value}.log"

    async def record(self, stream: AuditStream, payload: Mapping[str, Any]) -> None:  # type: ignore[override]
        try:
            line = serialize_record(stream, payload)
            async with aiofiles.open(self.path_for(stream), "a", encoding="utf-8") as f:
                await f.write(line)
        except Exception as exc:
            logger.error(
                "audit_write_failed",
                stream=stream.value,
                error=str(exc),
                error_type=type(exc).__name__,
            )
