"""
Exceptions for the payment gateway mapped to unified BusinessException variants.

The user-facing `message` is category level only; upstream status codes and
bodies go to `details` for server-side logs.
"""
from __future__ import annotations

from typing import Optional
from domain.common.exceptions import BusinessException
from shared.codes.payment_codes import PaymentCode


class PaymentProviderError(BusinessException):
    def __init__(
        self,
        message: str,
        *,
        provider: str,
        code: int = PaymentCode.PROVIDER_ERROR,
        error_type: str = "PaymentProviderError",
        status_code: Optional[int] = None,
        details: Optional[dict] = None,
    ):
        full_details = {"provider": provider, "status_code": status_code}
        if details:
            full_details.update(details)
        self.status_code = status_code
        super().__init__(
            code=code,
            message=message,
            error_type=error_type,
            details=full_details,
        )


class OrderCreationError(PaymentProviderError):
    def __init__(self, *, provider: str, status_code: Optional[int] = None, details: Optional[dict] = None):
        super().__init__(
            "Failed to create order",
            provider=provider,
            code=PaymentCode.ORDER_CREATION_FAILED,
            error_type="OrderCreationError",
            status_code=status_code,
            details=details,
        )


class PaymentStatusLookupError(PaymentProviderError):
    def __init__(self, *, provider: str, status_code: Optional[int] = None, details: Optional[dict] = None):
        super().__init__(
            "Failed to fetch payment status",
            provider=provider,
            code=PaymentCode.STATUS_LOOKUP_FAILED,
            error_type="PaymentStatusLookupError",
            status_code=status_code,
            details=details,
        )
