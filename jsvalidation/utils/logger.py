"""
JsValidation Logger
===================

Structured logging with key=value context.

Example:
    logger = get_logger("jsvalidation.remote")
    logger.info("Remote validation", attribute="email", validate_all=False)
"""

from __future__ import annotations

import sys
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, List, Optional

import orjson


class LogLevel(IntEnum):
    """Log levels."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @classmethod
    def parse(cls, value: Any) -> "LogLevel":
        """Parse level from name or number."""
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, int):
            return cls(value)
        return cls[str(value).upper()]


@dataclass
class LogRecord:
    """Structured log record."""

    level: LogLevel
    message: str
    logger_name: str = "jsvalidation"
    timestamp: datetime = field(default_factory=datetime.now)
    context: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[BaseException] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data: Dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.name,
            "logger": self.logger_name,
            "message": self.message,
        }

        if self.context:
            data["context"] = self.context

        if self.exception:
            data["exception"] = {
                "type": type(self.exception).__name__,
                "message": str(self.exception),
            }

        return data


class LogFormatter:
    """Base log formatter."""

    def format(self, record: LogRecord) -> str:
        raise NotImplementedError


class TextFormatter(LogFormatter):
    """
    Plain text formatter.

    Example output:
        2024-01-15 10:30:45 [DEBUG] jsvalidation: Rules converted attributes=3
    """

    def __init__(self, date_format: str = "%Y-%m-%d %H:%M:%S") -> None:
        self.date_format = date_format

    def format(self, record: LogRecord) -> str:
        message = record.message
        if record.context:
            pairs = " ".join(f"{k}={v}" for k, v in record.context.items())
            message = f"{message} {pairs}"

        output = (
            f"{record.timestamp.strftime(self.date_format)} "
            f"[{record.level.name}] {record.logger_name}: {message}"
        )

        if record.exception:
            output += "\n" + "".join(
                traceback.format_exception(
                    type(record.exception),
                    record.exception,
                    record.exception.__traceback__,
                )
            )

        return output


class JsonFormatter(LogFormatter):
    """JSON formatter for structured logging."""

    def format(self, record: LogRecord) -> str:
        return orjson.dumps(record.to_dict(), default=str).decode("utf-8")


class StreamHandler:
    """Write formatted records to a stream."""

    def __init__(
        self,
        stream: Any = None,
        formatter: Optional[LogFormatter] = None,
        level: LogLevel = LogLevel.DEBUG,
    ) -> None:
        self.stream = stream or sys.stderr
        self.formatter = formatter or TextFormatter()
        self.level = level

    def handle(self, record: LogRecord) -> None:
        if record.level >= self.level:
            self.stream.write(self.formatter.format(record) + "\n")
            self.stream.flush()


class Logger:
    """
    Structured logger.

    Example:
        logger = Logger("jsvalidation")
        logger.debug("Rule converted", attribute="email", rule="Unique")

        remote_logger = logger.with_context(remote=True)
        remote_logger.info("Validating")
    """

    def __init__(
        self,
        name: str = "jsvalidation",
        level: LogLevel = LogLevel.WARNING,
        handlers: Optional[List[StreamHandler]] = None,
    ) -> None:
        self.name = name
        self.level = level
        self._handlers: List[StreamHandler] = handlers if handlers is not None else []
        self._context: Dict[str, Any] = {}

    def add_handler(self, handler: StreamHandler) -> "Logger":
        self._handlers.append(handler)
        return self

    def with_context(self, **context: Any) -> "Logger":
        """Create a logger sharing handlers, with extra context."""
        new_logger = Logger(self.name, self.level, self._handlers)
        new_logger._context = {**self._context, **context}
        return new_logger

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(
        self,
        level: LogLevel,
        message: str,
        exception: Optional[BaseException] = None,
        **context: Any,
    ) -> None:
        if level < self.level:
            return

        record = LogRecord(
            level=level,
            message=message,
            logger_name=self.name,
            context={**self._context, **context},
            exception=exception,
        )

        for handler in self._handlers:
            handler.handle(record)

    def debug(self, message: str, **context: Any) -> None:
        self._log(LogLevel.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        self._log(LogLevel.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self._log(LogLevel.WARNING, message, **context)

    def error(
        self,
        message: str,
        exception: Optional[BaseException] = None,
        **context: Any,
    ) -> None:
        self._log(LogLevel.ERROR, message, exception, **context)


# Global logger registry
_loggers: Dict[str, Logger] = {}
_default_level = LogLevel.WARNING
_default_formatter: LogFormatter = TextFormatter()
_default_stream: Any = None


def get_logger(name: str = "jsvalidation") -> Logger:
    """
    Get or create a named logger.

    Loggers created before `configure_logging` pick up the new
    level and formatter when it is called.
    """
    if name not in _loggers:
        _loggers[name] = Logger(
            name=name,
            level=_default_level,
            handlers=[StreamHandler(stream=_default_stream, formatter=_default_formatter)],
        )
    return _loggers[name]


def configure_logging(
    level: Any = LogLevel.INFO,
    format: str = "text",
    stream: Any = None,
) -> Logger:
    """
    Configure every jsvalidation logger.

    Args:
        level: Log level (name, number or LogLevel)
        format: Output format ("text" or "json")
        stream: Output stream (stderr by default)

    Returns:
        Root jsvalidation logger
    """
    global _default_level, _default_formatter, _default_stream

    _default_level = LogLevel.parse(level)
    _default_formatter = JsonFormatter() if format == "json" else TextFormatter()
    _default_stream = stream

    for logger in _loggers.values():
        logger.level = _default_level
        logger._handlers[:] = [
            StreamHandler(stream=stream, formatter=_default_formatter)
        ]

    return get_logger("jsvalidation")
