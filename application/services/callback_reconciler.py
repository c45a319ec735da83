"""
Payment callback reconciliation ("dual inquiry").

A callback is accepted only when two independent signals agree:

1. the HMAC signature over ``order_id|payment_id`` matches, proving the
   payload was produced with our gateway secret, and
2. the gateway's own payment-status endpoint reports ``captured``, proving
   funds were actually collected.

Pipeline, run once per callback:
Received -> SignatureChecked -> StatusQueried -> Decided -> Logged -> Responded.

The raw payload is audited before anything else, the status lookup is best
effort (failure means unknown, never captured), and every invocation ends
with exactly one consolidated CallbackEvent record and a redirect, even when
an unexpected error interrupts the middle steps.
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from application.dtos.payments import CallbackPayload, CallbackResult
from application.ports.audit_log import AuditLogPort, AuditStream
from application.ports.payment_gateway import OrderGateway
from core.logging_config import get_logger
from domain.common.exceptions import BusinessException
from domain.payment.entity import CallbackEvent
from domain.services.signature import SignatureVerifier


logger = get_logger(__name__)


def append_query(url: str, **params: str) -> str:
    """Add query parameters to `url`, keeping any it already has."""
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    query.extend(params.items())
    return urlunsplit(parts._replace(query=urlencode(query)))


class CallbackReconciler:
    def __init__(
        self,
        verifier: SignatureVerifier,
        gateway: OrderGateway,
        audit_log: AuditLogPort,
        *,
        success_url: str,
        failure_url: str,
    ) -> None:
        self.verifier = verifier
        self.gateway = gateway
        self.audit_log = audit_log
        self.success_url = success_url
        self.failure_url = failure_url

    async def reconcile(self, payload: CallbackPayload) -> CallbackResult:
        # Audit first: evidence survives even if later steps blow up
        await self.audit_log.record(AuditStream.CALLBACK_REQUEST, payload.model_dump())

        payment_id = payload.razorpay_payment_id or None
        order_id = payload.razorpay_order_id or None
        signature_received = payload.razorpay_signature or None

        signature_generated: Optional[str] = None
        signature_match = False
        status_api: Optional[str] = None
        error: Optional[str] = None

        try:
            if order_id and payment_id:
                signature_generated = self.verifier.compute_signature(order_id, payment_id)
                signature_match = self.verifier.verify(signature_received, order_id, payment_id)
            status_api = await self._query_status(payment_id)
        except Exception as exc:
            error = type(exc).__name__
            logger.error(
                "callback_reconcile_failed",
                payment_id=payment_id,
                order_id=order_id,
                error=str(exc),
                exc_info=True,
            )
            await self.audit_log.record(
                AuditStream.CALLBACK_ERROR,
                {
                    "stage": "reconcile",
                    "payment_id": payment_id,
                    "order_id": order_id,
                    "error": error,
                },
            )

        event = CallbackEvent(
            payment_id=payment_id,
            order_id=order_id,
            signature_received=signature_received,
            signature_generated=signature_generated,
            signature_match=signature_match,
            status_api=status_api,
            error=error,
        )
        success = error is None and event.is_success

        await self.audit_log.record(AuditStream.CALLBACK_COMPLETE, event.to_record())
        logger.info(
            "callback_decided",
            payment_id=payment_id,
            order_id=order_id,
            signature_match=signature_match,
            status_api=status_api,
            success=success,
        )

        if success:
            return CallbackResult(
                success=True,
                redirect_url=append_query(self.success_url, order_id=order_id or ""),
                order_id=order_id,
            )
        return CallbackResult(success=False, redirect_url=self.failure_url, order_id=order_id)

    async def _query_status(self, payment_id: Optional[str]) -> Optional[str]:
        """Independent status inquiry; any failure yields None (unknown)."""
        if not payment_id:
            await self.audit_log.record(
                AuditStream.CALLBACK_ERROR,
                {"stage": "status_lookup", "payment_id": None, "error": "payment id missing"},
            )
            return None
        try:
            return await self.gateway.get_payment_status(payment_id)
        except Exception as exc:
            details = exc.details if isinstance(exc, BusinessException) else None
            message = exc.message if isinstance(exc, BusinessException) else str(exc)
            logger.warning(
                "callback_status_lookup_failed",
                payment_id=payment_id,
                error=message,
                error_type=type(exc).__name__,
                details=details,
            )
            await self.audit_log.record(
                AuditStream.CALLBACK_ERROR,
                {
                    "stage": "status_lookup",
                    "payment_id": payment_id,
                    "error": message,
                    "error_type": type(exc).__name__,
                    "details": details,
                },
            )
            return None
