"""
Payment specific codes and gateway status vocabulary.
"""
from __future__ import annotations

from enum import IntEnum


class PaymentCode(IntEnum):
    # Provider/Network errors (6xxxx)
    PROVIDER_ERROR = 60000
    ORDER_CREATION_FAILED = 60001
    STATUS_LOOKUP_FAILED = 60002


# Razorpay payment state that counts as paid (GET /payments/{id})
RAZORPAY_STATUS_CAPTURED = "captured"
