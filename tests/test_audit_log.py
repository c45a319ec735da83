import json

import pytest
import structlog

from application.ports.audit_log import AuditStream
from infrastructure.audit import FileAuditLog, InMemoryAuditLog, serialize_record


@pytest.mark.asyncio
async def test_one_file_per_stream(tmp_path):
    log = FileAuditLog(tmp_path / "audit")
    await log.record(AuditStream.ORDER_REQUEST, {"course": "ValidCourse"})
    await log.record(AuditStream.ORDER_REQUEST, {"course": "Other"})
    await log.record(AuditStream.ORDER_ERROR, {"error": "Failed to create order"})

    requests = (tmp_path / "audit" / "order_request.log").read_text(encoding="utf-8")
    assert requests.endswith("\n")
    lines = requests.splitlines()
    assert [json.loads(line)["course"] for line in lines] == ["ValidCourse", "Other"]

    [error] = (tmp_path / "audit" / "order_error.log").read_text(encoding="utf-8").splitlines()
    assert json.loads(error)["stream"] == "order_error"


def test_serialize_record_is_single_line():
    line = serialize_record(AuditStream.CALLBACK_REQUEST, {"note": "multi\nline", "amount": 1})
    assert line.count("\n") == 1 and line.endswith("\n")
    record = json.loads(line)
    assert record["note"] == "multi\nline"
    assert record["stream"] == "callback_request"
    assert record["logged_at"].endswith("Z")


def test_serialize_record_carries_request_id():
    structlog.contextvars.bind_contextvars(request_id="req-123")
    try:
        record = json.loads(serialize_record(AuditStream.ORDER_REQUEST, {}))
    finally:
        structlog.contextvars.clear_contextvars()
    assert record["request_id"] == "req-123"


@pytest.mark.asyncio
async def test_write_failure_is_swallowed(tmp_path):
    log = FileAuditLog(tmp_path)
    # a directory where the stream file should be makes open() fail
    (tmp_path / "callback_complete.log").mkdir()
    await log.record(AuditStream.CALLBACK_COMPLETE, {"payment_id": "pay_1"})


@pytest.mark.asyncio
async def test_in_memory_log_captures_calls():
    log = InMemoryAuditLog()
    await log.record(AuditStream.CALLBACK_REQUEST, {"a": 1})
    await log.record(AuditStream.CALLBACK_COMPLETE, {"b": 2})

    assert log.stream(AuditStream.CALLBACK_REQUEST) == [{"a": 1}]
    assert [s for s, _ in log.records] == [AuditStream.CALLBACK_REQUEST, AuditStream.CALLBACK_COMPLETE]
    log.clear()
    assert log.records == []
