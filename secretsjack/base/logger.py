"""
Structured logging for Secretsjack.

Provides a pre-configured logger that emits JSON-structured log records
with request context (service, operation, secret name) for easy filtering
in log aggregation tools. Secret values are never part of a record.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any


_CONTEXT_KEYS = ("request_id", "provider", "service", "operation", "secret_name", "error_code")


class StructuredFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Extras injected via SecretsjackLogger.log_operation
        for key in _CONTEXT_KEYS:
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry)


class SecretsjackLogger:
    """Convenience wrapper around :mod:`logging` for Secrets Manager calls."""

    def __init__(self, name: str = "secretsjack", provider: str = "aws", service: str = "secretsmanager") -> None:
        self.logger = logging.getLogger(name)
        self.provider = provider
        self.service = service
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def log_operation(
        self,
        level: int,
        message: str,
        *,
        operation: str | None = None,
        secret_name: str | None = None,
        error_code: str | None = None,
        request_id: str | None = None,
        exc_info: bool = False,
    ) -> None:
        """Emit a structured log record with Secrets Manager call context.

        Args:
            level: Logging level (e.g. logging.INFO).
            message: Human-readable message.
            operation: Operation name (e.g. 'get_secret').
            secret_name: Name or ARN of the secret involved, if any.
            error_code: Service error code for failed calls.
            request_id: Optional correlation ID; auto-generated if omitted.
            exc_info: Whether to include exception info.
        """
        if not self.logger.isEnabledFor(level):
            return
        extra = {
            "provider": self.provider,
            "service": self.service,
            "operation": operation,
            "secret_name": secret_name,
            "error_code": error_code,
            "request_id": request_id or uuid.uuid4().hex[:12],
        }
        self.logger.log(level, message, extra=extra, exc_info=exc_info)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.DEBUG, message, **kwargs)


# Module-level singleton
sj_logger = SecretsjackLogger()
