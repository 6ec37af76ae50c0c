"""
Application logger interface used by every specdoc component.

Components log through an ``AppLogger`` rather than the ``logging`` module
directly, so the output format, verbosity and component filters can be set
once by the CLI and swapped for a null or recording logger in tests.
"""

import json
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Protocol, Union

ExcInfo = Union[bool, BaseException]


@dataclass
class LogContext:
    """Structured log context information."""

    component: str
    operation: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        result = asdict(self)
        return {k: v for k, v in result.items() if v is not None}

    def with_operation(self, operation: str) -> "LogContext":
        """Return a copy of this context tagged with an operation name."""
        return LogContext(
            component=self.component, operation=operation, metadata=self.metadata
        )


class AppLogger(Protocol):
    """Protocol for application logging interface."""

    def debug(
        self, message: str, context: Optional[LogContext] = None, **kwargs
    ) -> None:
        """Log debug message."""
        ...

    def info(
        self, message: str, context: Optional[LogContext] = None, **kwargs
    ) -> None:
        """Log info message."""
        ...

    def warning(
        self, message: str, context: Optional[LogContext] = None, **kwargs
    ) -> None:
        """Log warning message."""
        ...

    def error(
        self,
        message: str,
        context: Optional[LogContext] = None,
        exc_info: ExcInfo = False,
        **kwargs,
    ) -> None:
        """Log error message."""
        ...


def format_message(
    message: str,
    context: Optional[LogContext] = None,
    structured: bool = False,
    **kwargs,
) -> str:
    """
    Render a message and its context as a single log line.

    Args:
        message: Human-readable message
        context: Optional component/operation context
        structured: Emit a JSON object instead of plain text
        **kwargs: Additional key/value pairs to attach

    Returns:
        The formatted log line
    """
    if structured:
        log_data: Dict[str, Any] = {"message": message, "timestamp": time.time()}
        if context:
            log_data.update(context.to_dict())
        if kwargs:
            log_data["additional"] = kwargs
        return json.dumps(log_data, default=str)

    parts = [message]
    if context:
        if context.component:
            parts.append(f"[{context.component}]")
        if context.operation:
            parts.append(f"({context.operation})")
    if kwargs:
        metadata_str = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        parts.append(f"[{metadata_str}]")
    return " ".join(parts)


class NullAppLogger:
    """Null object implementation for testing or disabled logging."""

    def debug(
        self, message: str, context: Optional[LogContext] = None, **kwargs
    ) -> None:
        pass

    def info(
        self, message: str, context: Optional[LogContext] = None, **kwargs
    ) -> None:
        pass

    def warning(
        self, message: str, context: Optional[LogContext] = None, **kwargs
    ) -> None:
        pass

    def error(
        self,
        message: str,
        context: Optional[LogContext] = None,
        exc_info: ExcInfo = False,
        **kwargs,
    ) -> None:
        pass


_default_logger: Optional[AppLogger] = None


def get_default_logger() -> AppLogger:
    """Get the default application logger instance."""
    global _default_logger
    if _default_logger is None:
        from specdoc.logging_config import create_logger_from_env

        _default_logger = create_logger_from_env()
    return _default_logger


def set_default_logger(logger: Optional[AppLogger]) -> None:
    """Set the default application logger instance (None resets it)."""
    global _default_logger
    _default_logger = logger
