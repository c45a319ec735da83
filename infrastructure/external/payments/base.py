"""
Base payment client implementing shared concerns: http, timeouts, retry, logging.

Concrete providers should subclass and implement provider-specific logic.
"""
from __future__ import annotations

from typing import Any, Callable, Optional
from contextlib import asynccontextmanager

import httpx
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential, retry_if_exception_type

from core.logging_config import get_logger
from application.dtos.payments import GatewayOrder
from application.ports.payment_gateway import OrderGateway


logger = get_logger(__name__)


class BasePaymentClient(OrderGateway):
    provider: str = "base"

    def __init__(
        self,
        *,
        timeouts: Optional[dict[str, float]] = None,
        retry: Optional[dict[str, Any]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeouts_cfg = timeouts or {"connect": 3.0, "read": 10.0, "write": 10.0, "total": 10.0}
        self._retry_cfg = retry or {"max": 1, "base": 0.2}
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def timeouts(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self._timeouts_cfg["connect"],
            read=self._timeouts_cfg["read"],
            write=self._timeouts_cfg["write"],
            timeout=self._timeouts_cfg["total"],
        )

    def _client_kwargs(self) -> dict[str, Any]:
        """Extra httpx.AsyncClient arguments (auth, base_url...) for subclasses."""
        return {}

    @asynccontextmanager
    async def client(self):
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeouts,
                transport=self._transport,
                **self._client_kwargs(),
            )
        try:
            yield self._client
        finally:
            # Keep open for reuse; explicit aclose() will close.
            ...

    async def aclose(self) -> None:
        """Close underlying HTTP client if created."""
        if self._client is not None:
            try:
                await self._client.aclose()
            finally:
                self._client = None

    async def _retry(self, fn: Callable[[], Any]):
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(int(self._retry_cfg["max"]) + 1),
            wait=wait_exponential(multiplier=self._retry_cfg["base"], min=0.1, max=2.0),
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.TransportError)),
            reraise=True,
        ):
            with attempt:
                return await fn()

    # Default implementations raise to force override where needed
    async def create_order(self, amount: int, currency: str, receipt: str) -> GatewayOrder:  # type: ignore[override]
        raise NotImplementedError

    async def get_payment_status(self, payment_id: str) -> str:  # type: ignore[override]
        raise NotImplementedError

    def _log(self, event: str, **kwargs) -> None:
        logger.info(
            event,
            provider=self.provider,
            **kwargs,
        )
