"""
Error response body shared by every JSON endpoint.

Success bodies are plain per-endpoint models (the browser/mobile clients
read top-level fields); errors carry a category message only.
"""
from typing import Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    code: int
    field: Optional[str] = None
    request_id: Optional[str] = None


def error_response(
    code: int,
    message: str,
    field: Optional[str] = None,
    request_id: Optional[str] = None,
) -> ErrorResponse:
    """
    Build an error body.

    Args:
        code: business code
        message: category-level message, safe to show to callers
        field: offending field, if any
        request_id: request id for correlating with server logs
    """
    return ErrorResponse(
        error=message,
        code=code,
        field=field,
        request_id=request_id,
    )
