"""
Application service for client-side payment verification.

Pure check of the checkout signature; no gateway call and no audit record.
"""
from __future__ import annotations

from application.dtos.payments import VerifyPaymentRequest
from core.logging_config import get_logger
from domain.common.exceptions import MissingFieldsException
from domain.services.signature import SignatureVerifier


logger = get_logger(__name__)


class PaymentVerificationService:
    def __init__(self, verifier: SignatureVerifier) -> None:
        self.verifier = verifier

    def verify(self, req: VerifyPaymentRequest) -> bool:
        missing = [name for name in ("order_id", "payment_id", "signature") if not getattr(req, name)]
        if missing:
            raise MissingFieldsException(missing)

        valid = self.verifier.verify(req.signature, req.order_id, req.payment_id)  # type: ignore[arg-type]
        logger.info(
            "payment_verified",
            order_id=req.order_id,
            payment_id=req.payment_id,
            valid=valid,
        )
        return valid
