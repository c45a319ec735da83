"""
Payments API routes.

Order creation, client-side verification, the gateway's completion callback
and phone acknowledgement. Keep this thin: no gateway details here.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from api.dependencies import (
    get_callback_reconciler,
    get_order_service,
    get_verification_service,
)
from application.dtos.payments import (
    CallbackPayload,
    CreateOrderRequest,
    CreateOrderResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
    VerifyPhoneRequest,
    VerifyPhoneResponse,
)
from application.services.callback_reconciler import CallbackReconciler
from application.services.order_service import OrderService
from application.services.payment_service import PaymentVerificationService
from core.logging_config import get_logger
from domain.common.exceptions import MissingFieldsException
from shared.masking import mask_phone


router = APIRouter(tags=["Payments"])
logger = get_logger(__name__)


@router.post("/create_order", summary="Create gateway order for a course", response_model=CreateOrderResponse)
async def create_order(
    payload: CreateOrderRequest,
    service: OrderService = Depends(get_order_service),
):
    order = await service.create_order(payload)
    return CreateOrderResponse(
        order_id=order.id,
        amount=order.amount,
        currency=order.currency,
        course=order.course,
    )


@router.post("/verify_payment", summary="Verify checkout signature", response_model=VerifyPaymentResponse)
async def verify_payment(
    payload: VerifyPaymentRequest,
    service: PaymentVerificationService = Depends(get_verification_service),
):
    return VerifyPaymentResponse(valid=service.verify(payload))


@router.post("/payment_callback", summary="Gateway completion callback")
async def payment_callback(
    request: Request,
    reconciler: CallbackReconciler = Depends(get_callback_reconciler),
):
    # Parsed by hand so that missing/odd fields still end in a redirect
    try:
        form = await request.form()
        fields = {k: v for k, v in form.items() if isinstance(v, str)}
    except Exception as exc:
        logger.warning("callback_form_unreadable", error=str(exc))
        fields = {}
    result = await reconciler.reconcile(CallbackPayload.model_validate(fields))
    return RedirectResponse(url=result.redirect_url, status_code=status.HTTP_303_SEE_OTHER)


@router.post("/verify_phone", summary="Acknowledge a verified phone number", response_model=VerifyPhoneResponse)
async def verify_phone(payload: VerifyPhoneRequest):
    if not payload.phone:
        raise MissingFieldsException(["phone"], message="Phone missing")
    # TODO: verify payload.id_token with the identity provider's admin SDK before trusting the phone
    logger.info("phone_verified", phone=mask_phone(payload.phone), has_id_token=bool(payload.id_token))
    return VerifyPhoneResponse(success=True, phone=payload.phone)
