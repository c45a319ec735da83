"""
Application service for course order creation.

Validates the course against the immutable catalog, converts the price to
minor units and delegates to the OrderGateway port. Every step lands in the
audit log: the inbound request, the gateway's raw response, or the error.
"""
from __future__ import annotations

import time
import uuid

from application.dtos.payments import CreateOrderRequest
from application.ports.audit_log import AuditLogPort, AuditStream
from application.ports.payment_gateway import OrderGateway
from core.logging_config import get_logger
from domain.catalog import CourseCatalog
from domain.common.exceptions import BusinessException, InvalidCourseException
from domain.payment.entity import Order


logger = get_logger(__name__)


def generate_receipt_id() -> str:
    """Per-call receipt id: epoch millis plus a random suffix for same-ms requests."""
    return f"receipt_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"


class OrderService:
    def __init__(
        self,
        catalog: CourseCatalog,
        gateway: OrderGateway,
        audit_log: AuditLogPort,
        *,
        currency: str = "INR",
    ) -> None:
        self.catalog = catalog
        self.gateway = gateway
        self.audit_log = audit_log
        self.currency = currency

    async def create_order(self, req: CreateOrderRequest) -> Order:
        await self.audit_log.record(AuditStream.ORDER_REQUEST, req.model_dump())

        course = self.catalog.get(req.course)
        if course is None:
            logger.info("order_invalid_course", course=req.course)
            raise InvalidCourseException(req.course)

        receipt = generate_receipt_id()
        amount = course.amount_minor_units
        try:
            gw_order = await self.gateway.create_order(amount, self.currency, receipt)
        except BusinessException as exc:
            logger.error(
                "order_create_failed",
                course=course.name,
                receipt=receipt,
                error=exc.message,
                details=exc.details,
            )
            await self.audit_log.record(
                AuditStream.ORDER_ERROR,
                {
                    "course": course.name,
                    "amount": amount,
                    "receipt": receipt,
                    "error": exc.message,
                    "details": exc.details,
                },
            )
            raise

        await self.audit_log.record(AuditStream.ORDER_RESPONSE, gw_order.raw or gw_order.model_dump())
        logger.info("order_created", order_id=gw_order.id, course=course.name, amount=gw_order.amount)
        return Order(
            id=gw_order.id,
            amount=gw_order.amount,
            currency=gw_order.currency,
            course=course.name,
        )
