"""
Factory for the payment gateway client.
"""
from __future__ import annotations

from typing import Optional

from core.settings import PaymentSettings, payment_settings
from application.ports.payment_gateway import OrderGateway


def get_payment_gateway(settings: Optional[PaymentSettings] = None) -> OrderGateway:
    from .razorpay_client import RazorpayClient
    return RazorpayClient(settings or payment_settings)
