"""
Payment gateway settings using pydantic-settings v2 with nested env keys.

Kept apart from core.config.Settings so gateway credentials are only read
where the gateway is wired up. Nested keys use the ``PAYMENT__`` prefix,
e.g. ``PAYMENT__CALLBACK__SUCCESS_URL`` or ``PAYMENT__TIMEOUTS__TOTAL``.
"""
from __future__ import annotations

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, BaseModel, Field


class PaymentTimeouts(BaseModel):
    connect: float = 3.0
    read: float = 10.0
    write: float = 10.0
    total: float = 10.0


class PaymentRetry(BaseModel):
    # Applies to status lookups only; order creation is never retried
    max: int = 1
    base_backoff: float = 0.2


class CallbackSettings(BaseModel):
    success_url: str = "/payment-success"
    failure_url: str = "/payment-failed"


class PaymentSettings(BaseSettings):
    # Flat names match the deployment environment of the hosted relay
    key_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("RAZORPAY_KEY_ID", "PAYMENT__KEY_ID"),
    )
    key_secret: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("RAZORPAY_KEY_SECRET", "PAYMENT__KEY_SECRET"),
    )
    api_base: str = "https://api.razorpay.com/v1"
    currency: str = "INR"
    timeouts: PaymentTimeouts = Field(default_factory=PaymentTimeouts)
    retry: PaymentRetry = Field(default_factory=PaymentRetry)
    callback: CallbackSettings = Field(default_factory=CallbackSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PAYMENT__",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )


payment_settings = PaymentSettings()
