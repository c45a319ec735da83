"""
Request ID middleware.

Generates or forwards a trace id and binds it through contextvars so every
structlog line (and audit record) of the request carries it.
"""
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

import structlog


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Request ID tracking middleware

    1. Reuse the incoming X-Request-ID header or generate a new id
    2. Bind it to the structlog contextvars
    3. Echo it in the response headers
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(self.HEADER_NAME)
        if not request_id:
            request_id = str(uuid.uuid4())

        client_ip = self._get_client_ip(request)

        request.state.request_id = request_id
        request.state.client_ip = client_ip

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            client_ip=client_ip,
            method=request.method,
            path=request.url.path,
        )

        response = await call_next(request)
        response.headers[self.HEADER_NAME] = request_id
        return response

    def _get_client_ip(self, request: Request) -> str:
        # Hosted behind a proxy: the first X-Forwarded-For hop is the client
        x_forwarded_for = request.headers.get("X-Forwarded-For")
        if x_forwarded_for:
            client_ip = x_forwarded_for.split(",")[0].strip()
        else:
            client_ip = request.headers.get("X-Real-IP")
            if not client_ip:
                client_ip = request.client.host if request.client else "unknown"
        return client_ip
