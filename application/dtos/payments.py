"""
Payment DTOs (Pydantic v2) used at application boundaries.
"""
from __future__ import annotations

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class CreateOrderRequest(BaseModel):
    # Optional so that a missing course is reported as an invalid course (400)
    course: Optional[str] = None


class CreateOrderResponse(BaseModel):
    order_id: str
    amount: int
    currency: str
    course: str


class GatewayOrder(BaseModel):
    """Order as acknowledged by the gateway."""

    id: str
    amount: int
    currency: str
    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)

    model_config = ConfigDict(extra="ignore")


class VerifyPaymentRequest(BaseModel):
    order_id: Optional[str] = None
    payment_id: Optional[str] = None
    signature: Optional[str] = None


class VerifyPaymentResponse(BaseModel):
    valid: bool


class CallbackPayload(BaseModel):
    """Form fields posted by the gateway's hosted checkout on completion."""

    razorpay_payment_id: Optional[str] = None
    razorpay_order_id: Optional[str] = None
    razorpay_signature: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class CallbackResult(BaseModel):
    success: bool
    redirect_url: str
    order_id: Optional[str] = None


class VerifyPhoneRequest(BaseModel):
    phone: Optional[str] = None
    # Accepted but not validated; see api.routes.payments.verify_phone
    id_token: Optional[str] = Field(default=None, alias="idToken")

    model_config = ConfigDict(populate_by_name=True)


class VerifyPhoneResponse(BaseModel):
    success: bool
    phone: str
