"""
Structured logging for the backend.

Loggers accept keyword fields next to the message:

    logger = get_logger(__name__)
    logger.info("Order created", order_id=12, items=3)

The fields travel on the record as ``fields`` and are rendered either as
one JSON object per line (production) or as ``key=value`` pairs after the
message (development). The request correlation ID is attached by
CorrelationIdFilter when the handler is installed through setup_logging().
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from shared.config.settings import settings

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
}


def _record_context(record: logging.LogRecord) -> tuple[str | None, dict[str, Any]]:
    request_id = getattr(record, "request_id", None)
    if request_id == "-":
        request_id = None
    return request_id, getattr(record, "fields", None) or {}


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        request_id, fields = _record_context(record)
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if request_id:
            payload["request_id"] = request_id
        if fields:
            payload.update(fields)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        if settings.debug:
            payload["at"] = f"{record.pathname}:{record.lineno}"
        return json.dumps(payload, default=str)


class ConsoleFormatter(logging.Formatter):
    """Colored single-line output for local runs."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        request_id, fields = _record_context(record)
        color = self.LEVEL_COLORS.get(record.levelno, "")
        clock = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        parts = [f"{color}{clock} {record.levelname:<8}{self.RESET}"]
        if request_id:
            parts.append(f"[{request_id[:8]}]")
        parts.append(f"{record.name}: {record.getMessage()}")
        if fields:
            parts.append(" ".join(f"{key}={value}" for key, value in fields.items()))

        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class StructuredLogger(logging.Logger):
    """Logger whose level methods take arbitrary keyword fields."""

    def _log(  # type: ignore[override]
        self,
        level: int,
        msg: object,
        args: Any,
        exc_info: Any = None,
        extra: dict[str, Any] | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
        **fields: Any,
    ) -> None:
        if fields:
            extra = {**(extra or {}), "fields": fields}
        super()._log(
            level,
            msg,
            args,
            exc_info=exc_info,
            extra=extra,
            stack_info=stack_info,
            stacklevel=stacklevel + 1,
        )


logging.setLoggerClass(StructuredLogger)


def _use_json() -> bool:
    if settings.log_json is not None:
        return settings.log_json
    return settings.environment == "production"


def setup_logging() -> None:
    """
    Install a single stdout handler on the root logger.
    Safe to call more than once; previous handlers are replaced.
    """
    from shared.infrastructure.correlation import CorrelationIdFilter

    level = logging.DEBUG if settings.debug else logging.getLevelName(settings.log_level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(JsonFormatter() if _use_json() else ConsoleFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


def get_logger(name: str) -> StructuredLogger:
    return logging.getLogger(name)  # type: ignore[return-value]


def mask_email(email: str | None) -> str:
    """
    Hide most of the local part: "customer@example.com" -> "cu***@example.com".
    """
    if not email or "@" not in email:
        return "<no-email>" if not email else "***@invalid"
    local, domain = email.split("@", 1)
    return f"{local[:2] if len(local) > 2 else local[:1]}***@{domain}"


def mask_phone(phone: str | None) -> str:
    """Keep only the last two digits of a phone number."""
    if not phone:
        return "<no-phone>"
    return f"***{phone[-2:]}"


# Named loggers shared across modules
rest_api_logger = get_logger("rest_api")
orders_logger = get_logger("rest_api.orders")
auth_logger = get_logger("rest_api.auth")
admin_logger = get_logger("rest_api.admin")
ws_gateway_logger = get_logger("ws_gateway")
