"""
Shared business codes used across layers (Domain/Core/API).

This package exposes BusinessCode at `shared.codes` and keeps
payment-specific codes under `shared.codes.payment_codes`.
"""
from enum import IntEnum


class BusinessCode(IntEnum):
    """Unified business status codes (single source of truth)."""

    # Parameter errors (1xxxx)
    PARAM_ERROR = 10000
    PARAM_MISSING = 10001
    PARAM_VALIDATION_ERROR = 10003

    # Business errors (2xxxx)
    INVALID_COURSE = 20001
    NOT_FOUND = 20006  # Generic resource not found

    # System errors (4xxxx)
    SYSTEM_ERROR = 40000
    CONFIGURATION_ERROR = 40001
    SERVICE_UNAVAILABLE = 40003


__all__ = ["BusinessCode"]
