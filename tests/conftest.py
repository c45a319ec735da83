"""Pytest bootstrap configuration.

Gateway settings are read at import time, so the environment is prepared
before any application module is imported.
"""
import hashlib
import hmac
import os

os.environ.setdefault("RAZORPAY_KEY_ID", "rzp_test_key")
os.environ.setdefault("RAZORPAY_KEY_SECRET", "test_secret")

import pytest

from application.dtos.payments import GatewayOrder
from domain.catalog import Course, CourseCatalog
from domain.services.signature import SignatureVerifier
from infrastructure.audit import InMemoryAuditLog


TEST_SECRET = "test_secret"


def sign(order_id: str, payment_id: str, secret: str = TEST_SECRET) -> str:
    """Reference signature computed independently of SignatureVerifier."""
    return hmac.new(secret.encode(), f"{order_id}|{payment_id}".encode(), hashlib.sha256).hexdigest()


class FakeGateway:
    """Scripted OrderGateway: returns canned statuses/orders or raises."""

    provider = "fake"

    def __init__(self, *, status=None, status_error=None, order_error=None):
        self.status = status
        self.status_error = status_error
        self.order_error = order_error
        self.order_calls: list[tuple[int, str, str]] = []
        self.status_calls: list[str] = []
        self.closed = False

    async def create_order(self, amount: int, currency: str, receipt: str) -> GatewayOrder:
        self.order_calls.append((amount, currency, receipt))
        if self.order_error is not None:
            raise self.order_error
        raw = {
            "id": f"order_{len(self.order_calls)}",
            "entity": "order",
            "amount": amount,
            "currency": currency,
            "receipt": receipt,
            "status": "created",
        }
        return GatewayOrder(id=raw["id"], amount=amount, currency=currency, raw=raw)

    async def get_payment_status(self, payment_id: str) -> str:
        self.status_calls.append(payment_id)
        if self.status_error is not None:
            raise self.status_error
        if isinstance(self.status, dict):
            return self.status[payment_id]
        return self.status

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def verifier() -> SignatureVerifier:
    return SignatureVerifier(TEST_SECRET)


@pytest.fixture
def catalog() -> CourseCatalog:
    return CourseCatalog.from_courses(
        [
            Course(name="ValidCourse", price=500),
            Course(name="Python Fundamentals", price=499),
        ]
    )


@pytest.fixture
def audit_log() -> InMemoryAuditLog:
    return InMemoryAuditLog()


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway(status="captured")


@pytest.fixture
def make_gateway():
    return FakeGateway


@pytest.fixture
def signer():
    return sign
