"""Structured logging for the portfolio API.

Every record can carry a correlation id taken from a ``ContextVar`` that the
HTTP middleware sets per request. Records are rendered as one JSON object per
line (or a plain console line), after sensitive fields such as credentials
and the owner's contact details are masked.

Event names are dotted (``http.request``, ``rate_limit.exceeded``) and the
structured fields travel in ``extra``.
"""

from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from logging import LogRecord
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterable, Mapping

from portfolio_api.core.config import LogSettings, settings

SERVICE_NAME = "portfolio-api"
REDACTED = "[REDACTED]"

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)

# Matched after lowercasing and turning "-" into "_", so "Set-Cookie" and
# "set_cookie" are the same key.
SENSITIVE_KEYS_DEFAULT: frozenset[str] = frozenset(
    {
        "authorization",
        "cookie",
        "set_cookie",
        "password",
        "secret",
        "token",
        "email",
        "phone",
    }
)

# Chatty third-party loggers held at WARNING unless we run at DEBUG
_NOISY_LOGGERS = ("aiosqlite", "asyncio")

# Standard LogRecord attributes; anything else on a record came from ``extra``
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


def set_correlation_id(correlation_id: str | None) -> None:
    _correlation_id_var.set(correlation_id)


def get_correlation_id() -> str | None:
    return _correlation_id_var.get()


def clear_correlation_id() -> None:
    _correlation_id_var.set(None)


def _normalize_key(key: str) -> str:
    return key.lower().replace("-", "_")


class Redactor:
    """Masks values whose key is sensitive, descending into dicts and lists."""

    def __init__(self, sensitive_keys: Iterable[str] | None = None) -> None:
        keys = SENSITIVE_KEYS_DEFAULT if sensitive_keys is None else sensitive_keys
        self.sensitive_keys = frozenset(_normalize_key(k) for k in keys)

    def is_sensitive(self, key: str) -> bool:
        return _normalize_key(key) in self.sensitive_keys

    def redact(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {
                k: REDACTED if isinstance(k, str) and self.is_sensitive(k) else self.redact(v)
                for k, v in value.items()
            }
        if isinstance(value, (list, tuple)):
            return type(value)(self.redact(v) for v in value)
        return value

    def extras(self, record: LogRecord) -> dict[str, Any]:
        """Return the record's ``extra`` fields with sensitive values masked."""
        data: dict[str, Any] = {}
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS or key.startswith("_"):
                continue
            data[key] = REDACTED if self.is_sensitive(key) else self.redact(value)
        return data


class CorrelationIdFilter(logging.Filter):
    """Attach correlation_id from context when absent on the record."""

    def filter(self, record: LogRecord) -> bool:  # noqa: D401
        if getattr(record, "correlation_id", None) is None:
            correlation_id = get_correlation_id()
            if correlation_id:
                record.correlation_id = correlation_id
        return True


class SensitiveDataFilter(logging.Filter):
    """Redact sensitive fields on the record before any formatter sees it."""

    def __init__(self, sensitive_keys: Iterable[str] | None = None) -> None:
        super().__init__()
        self.redactor = Redactor(sensitive_keys)

    def filter(self, record: LogRecord) -> bool:  # noqa: D401
        for key, value in self.redactor.extras(record).items():
            setattr(record, key, value)
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    Args:
        sensitive_keys: Keys to mask; defaults to ``SENSITIVE_KEYS_DEFAULT``.
        include_caller: Add ``caller`` as ``module:lineno`` (debug runs).
        static_fields: Fields merged into every record (``service`` by default).
    """

    def __init__(
        self,
        *,
        sensitive_keys: Iterable[str] | None = None,
        include_caller: bool = False,
        static_fields: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__()
        self.redactor = Redactor(sensitive_keys)
        self.include_caller = include_caller
        self.static_fields = dict(static_fields or {"service": SERVICE_NAME})

    def format(self, record: LogRecord) -> str:  # noqa: D401
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
            **self.static_fields,
        }

        correlation_id = getattr(record, "correlation_id", None) or get_correlation_id()
        if correlation_id:
            payload["correlation_id"] = correlation_id
        if self.include_caller:
            payload["caller"] = f"{record.module}:{record.lineno}"

        payload.update(self.redactor.extras(record))

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)

        return json.dumps(payload, default=str)


class PlainFormatter(logging.Formatter):
    """Human-readable console line with the correlation id and extra fields."""

    def __init__(self, *, sensitive_keys: Iterable[str] | None = None) -> None:
        super().__init__("%(asctime)s %(levelname)-7s %(name)s %(message)s")
        self.redactor = Redactor(sensitive_keys)

    def format(self, record: LogRecord) -> str:  # noqa: D401
        line = super().format(record)
        extras = self.redactor.extras(record)
        if extras:
            fields = " ".join(f"{key}={value}" for key, value in sorted(extras.items()))
            line = f"{line} {fields}"
        return line


def _build_handler(log_settings: LogSettings) -> logging.Handler:
    if log_settings.output.lower() != "file":
        return logging.StreamHandler(sys.stdout)

    file_path = Path(log_settings.file_path or "logs/portfolio-api.log")
    file_path.parent.mkdir(parents=True, exist_ok=True)
    if log_settings.max_bytes:
        return RotatingFileHandler(
            file_path,
            maxBytes=log_settings.max_bytes,
            backupCount=log_settings.backup_count,
            encoding="utf-8",
        )
    return logging.FileHandler(file_path, encoding="utf-8")


def configure_logging(log_settings: LogSettings | None = None) -> None:
    """Install a single redacting handler on the root logger.

    Safe to call more than once (each app instance in tests calls it); the
    previous root handlers are replaced.

    Args:
        log_settings: Optional log settings; defaults to global settings.
    """

    cfg = log_settings or settings.log
    level = getattr(logging, cfg.level.upper(), logging.INFO)

    handler = _build_handler(cfg)
    handler.addFilter(CorrelationIdFilter())
    handler.addFilter(SensitiveDataFilter())
    if cfg.format.lower() == "plain":
        handler.setFormatter(PlainFormatter())
    else:
        handler.setFormatter(JsonFormatter(include_caller=level <= logging.DEBUG))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)

    # uvicorn ships its own handlers; keep its records out of ours
    logging.getLogger("uvicorn").propagate = False
    logging.getLogger("uvicorn.access").propagate = False
