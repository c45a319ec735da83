"""
Structlog logging configuration.

Application logs only; the forensic audit trail lives in infrastructure.audit.
"""
import logging
import json
import structlog
from structlog.processors import TimeStamper, add_log_level, JSONRenderer
from structlog.dev import ConsoleRenderer
from structlog.contextvars import merge_contextvars
from structlog.stdlib import ProcessorFormatter
from structlog.typing import EventDict, WrappedLogger
from typing import Any, List

from core.config import settings


# Event keys whose values must never reach a log sink
REDACTED_KEYS = frozenset({"key_secret", "razorpay_key_secret", "secret", "password", "id_token", "idtoken"})


def redact_secrets(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask credential-like keys at the top level of an event."""
    for key in list(event_dict):
        if key.lower() in REDACTED_KEYS and event_dict[key]:
            event_dict[key] = "***"
    return event_dict


def get_renderer() -> Any:
    """Pick the renderer by environment (Console in DEBUG, JSON otherwise).

    structlog passes default/sort_keys to the serializer, so accept kwargs.
    """
    if settings.DEBUG:
        return ConsoleRenderer(colors=True)

    def _dumps(obj, default=None, **kwargs):
        return json.dumps(obj, ensure_ascii=False, default=default, **kwargs)
    return JSONRenderer(serializer=_dumps)


def configure_logging() -> None:
    """Configure structlog and bridge stdlib logging (uvicorn, httpx) into the same chain."""
    shared_pre_chain: List[Any] = [
        merge_contextvars,
        add_log_level,
        TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            *shared_pre_chain,
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = ProcessorFormatter(
        foreign_pre_chain=shared_pre_chain,
        processors=[
            ProcessorFormatter.remove_processors_meta,
            get_renderer(),
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    level = settings.LOG_LEVEL or ("DEBUG" if settings.DEBUG else "INFO")
    root.setLevel(level.upper())
    # httpx logs every request line at INFO, including the gateway URL
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger."""
    return structlog.get_logger(name)
