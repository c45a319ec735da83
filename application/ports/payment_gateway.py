"""
Order gateway port (application/ports) exposing a replaceable protocol.

Application depends on this Protocol; infrastructure implements adapters.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from application.dtos.payments import GatewayOrder


@runtime_checkable
class OrderGateway(Protocol):
    """Gateway protocol for order creation and payment status inquiry.

    Implementations should be async and side-effect free beyond IO.
    Failures surface as `OrderCreationError` / `PaymentStatusLookupError`.
    """

    provider: str

    async def create_order(self, amount: int, currency: str, receipt: str) -> GatewayOrder: ...

    async def get_payment_status(self, payment_id: str) -> str: ...

    async def aclose(self) -> None: ...
