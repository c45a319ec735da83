"""
Razorpay Orders/Payments adapter over the REST API (httpx, basic auth).

Endpoints used:
- POST {api_base}/orders           create an order (amount in paise)
- GET  {api_base}/payments/{id}    fetch a payment, `status` is the lifecycle state

Order creation is not retried: a retried POST could create a second order.
Status lookups are idempotent GETs and retry on transport errors only.
"""
from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

import httpx

from application.dtos.payments import GatewayOrder
from core.settings import PaymentSettings, payment_settings as default_payment_settings
from infrastructure.external.payments.base import BasePaymentClient
from infrastructure.external.payments.exceptions import (
    OrderCreationError,
    PaymentStatusLookupError,
)


def _safe_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text[:500]


class RazorpayClient(BasePaymentClient):
    provider = "razorpay"

    def __init__(
        self,
        settings: Optional[PaymentSettings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        cfg = settings or default_payment_settings
        super().__init__(
            timeouts=cfg.timeouts.model_dump(),
            retry={"max": cfg.retry.max, "base": cfg.retry.base_backoff},
            transport=transport,
        )
        self._key_id = cfg.key_id or ""
        self._key_secret = cfg.key_secret or ""
        self._api_base = cfg.api_base.rstrip("/")

    def _client_kwargs(self) -> dict[str, Any]:
        return {
            "base_url": self._api_base,
            "auth": httpx.BasicAuth(self._key_id, self._key_secret),
            "headers": {"Accept": "application/json"},
        }

    async def create_order(self, amount: int, currency: str, receipt: str) -> GatewayOrder:  # type: ignore[override]
        body = {
            "amount": amount,
            "currency": currency,
            "receipt": receipt,
            "payment_capture": 1,
        }
        self._log("gateway_order_request", amount=amount, currency=currency, receipt=receipt)
        try:
            async with self.client() as client:
                response = await client.post("/orders", json=body)
        except httpx.HTTPError as exc:
            raise OrderCreationError(
                provider=self.provider,
                details={"error": str(exc), "error_type": type(exc).__name__},
            ) from exc

        if not response.is_success:
            raise OrderCreationError(
                provider=self.provider,
                status_code=response.status_code,
                details={"body": _safe_body(response)},
            )
        data = _safe_body(response)
        try:
            order = GatewayOrder(id=data["id"], amount=data["amount"], currency=data["currency"], raw=data)
        except (KeyError, TypeError, ValueError) as exc:
            raise OrderCreationError(
                provider=self.provider,
                status_code=response.status_code,
                details={"body": data, "error": "malformed order response"},
            ) from exc
        self._log("gateway_order_created", order_id=order.id, amount=order.amount)
        return order

    async def get_payment_status(self, payment_id: str) -> str:  # type: ignore[override]
        async def _fetch() -> httpx.Response:
            async with self.client() as client:
                return await client.get(f"/payments/{quote(payment_id, safe='')}")

        try:
            response = await self._retry(_fetch)
        except httpx.HTTPError as exc:
            raise PaymentStatusLookupError(
                provider=self.provider,
                details={"payment_id": payment_id, "error": str(exc), "error_type": type(exc).__name__},
            ) from exc

        if not response.is_success:
            raise PaymentStatusLookupError(
                provider=self.provider,
                status_code=response.status_code,
                details={"payment_id": payment_id, "body": _safe_body(response)},
            )
        data = _safe_body(response)
        status = data.get("status") if isinstance(data, dict) else None
        if not isinstance(status, str) or not status:
            raise PaymentStatusLookupError(
                provider=self.provider,
                status_code=response.status_code,
                details={"payment_id": payment_id, "error": "status missing from response"},
            )
        self._log("gateway_payment_status", payment_id=payment_id, status=status)
        return status
