import re

import pytest

from application.dtos.payments import CreateOrderRequest
from application.ports.audit_log import AuditStream
from application.services.order_service import OrderService, generate_receipt_id
from domain.common.exceptions import InvalidCourseException
from infrastructure.external.payments.exceptions import OrderCreationError


@pytest.mark.asyncio
async def test_create_order_converts_price_to_minor_units(catalog, gateway, audit_log):
    svc = OrderService(catalog, gateway, audit_log)
    order = await svc.create_order(CreateOrderRequest(course="ValidCourse"))

    [(amount, currency, receipt)] = gateway.order_calls
    assert amount == 50000
    assert currency == "INR"
    assert receipt.startswith("receipt_")
    assert order.id == "order_1"
    assert order.amount == 50000
    assert order.currency == "INR"
    assert order.course == "ValidCourse"


@pytest.mark.asyncio
@pytest.mark.parametrize("course", ["NonexistentCourse", "", None, "validcourse"])
async def test_invalid_course_makes_no_gateway_call(catalog, gateway, audit_log, course):
    svc = OrderService(catalog, gateway, audit_log)
    with pytest.raises(InvalidCourseException):
        await svc.create_order(CreateOrderRequest(course=course))
    assert gateway.order_calls == []
    # inbound request is still audited
    assert audit_log.stream(AuditStream.ORDER_REQUEST) == [{"course": course}]
    assert audit_log.stream(AuditStream.ORDER_RESPONSE) == []


@pytest.mark.asyncio
async def test_request_and_gateway_response_are_audited_separately(catalog, gateway, audit_log):
    svc = OrderService(catalog, gateway, audit_log)
    await svc.create_order(CreateOrderRequest(course="Python Fundamentals"))

    assert audit_log.stream(AuditStream.ORDER_REQUEST) == [{"course": "Python Fundamentals"}]
    [response] = audit_log.stream(AuditStream.ORDER_RESPONSE)
    # raw gateway body, not the trimmed DTO
    assert response["entity"] == "order"
    assert response["amount"] == 49900


@pytest.mark.asyncio
async def test_gateway_failure_is_audited_and_propagated(catalog, make_gateway, audit_log):
    gateway = make_gateway(order_error=OrderCreationError(provider="fake", status_code=401, details={"body": "bad key"}))
    svc = OrderService(catalog, gateway, audit_log)

    with pytest.raises(OrderCreationError):
        await svc.create_order(CreateOrderRequest(course="ValidCourse"))

    [error] = audit_log.stream(AuditStream.ORDER_ERROR)
    assert error["course"] == "ValidCourse"
    assert error["amount"] == 50000
    assert error["error"] == "Failed to create order"
    assert error["details"]["status_code"] == 401
    assert audit_log.stream(AuditStream.ORDER_RESPONSE) == []


@pytest.mark.asyncio
async def test_currency_is_configurable(catalog, gateway, audit_log):
    svc = OrderService(catalog, gateway, audit_log, currency="USD")
    order = await svc.create_order(CreateOrderRequest(course="ValidCourse"))
    assert order.currency == "USD"


def test_receipt_ids_are_unique_and_short():
    receipts = {generate_receipt_id() for _ in range(500)}
    assert len(receipts) == 500
    for receipt in receipts:
        assert re.fullmatch(r"receipt_\d{13}_[0-9a-f]{8}", receipt)
        # gateway limit on receipt length
        assert len(receipt) <= 40
