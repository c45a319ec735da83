"""
Exception-to-response mapping and global exception handlers.
"""
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import uuid
from starlette import status as http_status

from .response import error_response
from shared.codes import BusinessCode
from shared.codes.payment_codes import PaymentCode
from core.logging_config import get_logger
from domain.common.exceptions import BusinessException


def _request_id(request: Request) -> str:
    return getattr(getattr(request, "state", object()), "request_id", None) or str(uuid.uuid4())


def business_code_to_http_status(code: int) -> int:
    """Map a business code to an HTTP status (default 400)."""
    mapping = {
        BusinessCode.PARAM_ERROR: http_status.HTTP_400_BAD_REQUEST,
        BusinessCode.PARAM_MISSING: http_status.HTTP_400_BAD_REQUEST,
        BusinessCode.PARAM_VALIDATION_ERROR: http_status.HTTP_400_BAD_REQUEST,

        BusinessCode.INVALID_COURSE: http_status.HTTP_400_BAD_REQUEST,
        BusinessCode.NOT_FOUND: http_status.HTTP_404_NOT_FOUND,

        BusinessCode.SYSTEM_ERROR: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
        BusinessCode.CONFIGURATION_ERROR: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
        BusinessCode.SERVICE_UNAVAILABLE: http_status.HTTP_503_SERVICE_UNAVAILABLE,

        PaymentCode.PROVIDER_ERROR: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
        PaymentCode.ORDER_CREATION_FAILED: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
        PaymentCode.STATUS_LOOKUP_FAILED: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
    }
    # BusinessCode and PaymentCode are IntEnums, plain ints hash the same
    return mapping.get(int(code), http_status.HTTP_400_BAD_REQUEST)


def register_exception_handlers(app: FastAPI):
    """
    Register global exception handlers.

    Args:
        app: FastAPI application
    """

    logger = get_logger(__name__)

    @app.exception_handler(BusinessException)
    async def business_exception_handler(request: Request, exc: BusinessException):
        """Business errors: category message only, details stay in server logs."""
        request_id = _request_id(request)
        status_code = business_code_to_http_status(exc.code)
        if status_code >= 500:
            logger.error(
                "business_exception",
                request_id=request_id,
                error_type=exc.error_type,
                error=exc.message,
                details=exc.details,
            )
        response = error_response(
            code=exc.code,
            message=exc.message,
            field=exc.field,
            request_id=request_id,
        )
        return JSONResponse(status_code=status_code, content=response.model_dump(mode="json", exclude_none=True))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed request bodies are validation errors (400)."""
        request_id = _request_id(request)
        errors = exc.errors()
        first_error = errors[0] if errors else {}
        field = ".".join(str(loc) for loc in first_error.get("loc", [])[1:]) or None

        response = error_response(
            code=BusinessCode.PARAM_VALIDATION_ERROR,
            message="Invalid request body",
            field=field,
            request_id=request_id,
        )
        return JSONResponse(
            status_code=http_status.HTTP_400_BAD_REQUEST,
            content=response.model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """HTTP errors raised by routing (404, 405...)."""
        request_id = _request_id(request)
        code_mapping = {
            404: BusinessCode.NOT_FOUND,
            500: BusinessCode.SYSTEM_ERROR,
            503: BusinessCode.SERVICE_UNAVAILABLE,
        }
        code = code_mapping.get(exc.status_code, BusinessCode.PARAM_ERROR)
        response = error_response(
            code=code,
            message=str(exc.detail),
            request_id=request_id,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=response.model_dump(mode="json", exclude_none=True),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Anything unexpected: generic 500, full detail only in the server log."""
        request_id = _request_id(request)
        logger.error(
            "unhandled_exception",
            request_id=request_id,
            error=str(exc),
            exc_info=True,
        )
        response = error_response(
            code=BusinessCode.SYSTEM_ERROR,
            message="Internal Server Error",
            request_id=request_id,
        )
        return JSONResponse(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=response.model_dump(mode="json", exclude_none=True),
        )
