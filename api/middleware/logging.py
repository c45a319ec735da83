"""
Request/response logging middleware with timing.
"""
import time
from typing import Any
import json
from urllib.parse import parse_qs

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from core.logging_config import get_logger
from core.config import settings
from shared.masking import mask_phone


logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logging middleware

    1. Log the request (method, path, params, masked body)
    2. Log the response (status code, duration)
    3. Log exceptions escaping the handlers
    """

    # Liveness probes hit these constantly
    SKIP_PATHS = {"/", "/health", "/docs", "/redoc", "/openapi.json"}

    # Masked in logged bodies
    SENSITIVE_FIELDS = {
        "signature",
        "razorpay_signature",
        "idtoken",
        "id_token",
        "token",
        "secret",
        "key_secret",
        "password",
    }

    # Partially masked, last four digits kept
    PHONE_FIELDS = {"phone", "phone_number", "phonenumber"}

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.enable_body_log_default: bool = settings.LOG_REQUEST_BODY_ENABLE_BY_DEFAULT
        self.max_body_log_bytes: int = settings.LOG_REQUEST_BODY_MAX_BYTES

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.SKIP_PATHS:
            return await call_next(request)

        start_time = time.time()
        request_info = await self._get_request_info(request)
        logger.info("request_started", **request_info)

        try:
            response = await call_next(request)
            duration = time.time() - start_time
            self._log_response(response, duration, request_info)
            response.headers["X-Process-Time"] = f"{duration:.3f}"
            return response

        except Exception as exc:
            duration = time.time() - start_time
            logger.error(
                "request_failed",
                duration=duration,
                error=str(exc),
                error_type=type(exc).__name__,
                **request_info,
                exc_info=True
            )
            # Let the exception handlers build the response
            raise

    async def _get_request_info(self, request: Request) -> dict:
        info = {
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
        }

        if request.method in ["POST", "PUT", "PATCH"] and self._should_log_body(request):
            body_snippet = await self._extract_and_sanitize_body(request)
            if body_snippet is not None:
                info["body"] = body_snippet
            else:
                info["has_body"] = True

        user_agent = request.headers.get("User-Agent")
        if user_agent:
            info["user_agent"] = user_agent

        return info

    def _should_log_body(self, request: Request) -> bool:
        # Bodies are logged only in DEBUG; X-Log-Body: true/false overrides
        header = (request.headers.get("X-Log-Body") or "").lower()
        if header in {"true", "1", "yes"}:
            return True
        if header in {"false", "0", "no"}:
            return False
        return bool(self.enable_body_log_default and settings.DEBUG)

    async def _extract_and_sanitize_body(self, request: Request) -> Any:
        try:
            body = await request.body()
        except Exception:
            return None

        if not body:
            return None

        snippet = body[: self.max_body_log_bytes]
        content_type = request.headers.get("content-type", "").lower()
        parsed: Any = None
        if "application/json" in content_type:
            try:
                parsed = json.loads(snippet.decode("utf-8", errors="ignore"))
            except Exception:
                parsed = snippet.decode("utf-8", errors="ignore")
        elif "application/x-www-form-urlencoded" in content_type:
            parsed = {k: v if len(v) > 1 else v[0] for k, v in parse_qs(snippet.decode("utf-8", errors="ignore")).items()}
        elif "multipart/form-data" in content_type:
            return None
        else:
            parsed = snippet.decode("utf-8", errors="ignore")

        return self.sanitize(parsed)

    def sanitize(self, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: self._sanitize_field(str(k).lower(), v) for k, v in data.items()}
        if isinstance(data, list):
            return [self.sanitize(v) for v in data]
        return data

    def _sanitize_field(self, key: str, value: Any) -> Any:
        if key in self.SENSITIVE_FIELDS:
            return "***"
        if key in self.PHONE_FIELDS:
            return mask_phone(value) if isinstance(value, str) else "***"
        return self.sanitize(value)

    def _log_response(self, response: Response, duration: float, request_info: dict):
        status_code = response.status_code
        log_data = {
            "status_code": status_code,
            "duration": duration,
            **request_info
        }

        if status_code < 400:
            logger.info("request_completed", **log_data)
        elif status_code < 500:
            logger.warning("request_client_error", **log_data)
        else:
            logger.error("request_server_error", **log_data)
