"""
Logging configuration with verbosity control and multiple handlers.

This module provides configurable logging with support for:
- Console, plain file and rotating file handlers
- Verbosity levels and component filtering
- Structured (JSON) and text formatting options
- Environment-based configuration
"""

import logging
import logging.handlers
import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from specdoc.app_logger import AppLogger, ExcInfo, LogContext, format_message

DEFAULT_LOG_FILE = "logs/specdoc.log"


class LogHandler(Enum):
    """Available log handler types."""

    CONSOLE = "console"
    FILE = "file"
    ROTATING_FILE = "rotating_file"
    NULL = "null"


class LogFormat(Enum):
    """Available log format types."""

    STRUCTURED = "structured"  # JSON format
    SIMPLE = "simple"  # Human-readable text
    DETAILED = "detailed"  # Detailed text with timestamps


class VerbosityLevel(Enum):
    """Verbosity levels for controlling log output."""

    QUIET = 1  # Errors and warnings only
    NORMAL = 2  # Info, warnings, errors
    VERBOSE = 3  # Debug and above


FORMAT_NAMES: Dict[str, LogFormat] = {
    "json": LogFormat.STRUCTURED,
    "structured": LogFormat.STRUCTURED,
    "simple": LogFormat.SIMPLE,
    "detailed": LogFormat.DETAILED,
}


@dataclass
class HandlerConfig:
    """Configuration for a single log handler."""

    type: LogHandler
    level: Optional[str] = None  # If None, uses global level
    format: Optional[LogFormat] = None  # If None, uses global format

    filename: Optional[str] = None
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5

    stream: str = "stderr"  # "stdout" or "stderr"
    date_format: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class LoggingConfig:
    """Complete logging configuration."""

    verbosity: VerbosityLevel = VerbosityLevel.NORMAL
    global_level: Optional[str] = None
    global_format: LogFormat = LogFormat.SIMPLE
    logger_name: str = "specdoc"

    handlers: List[HandlerConfig] = field(
        default_factory=lambda: [HandlerConfig(type=LogHandler.CONSOLE)]
    )

    exclude_components: List[str] = field(default_factory=list)
    include_only_components: Optional[List[str]] = None

    @property
    def effective_level(self) -> str:
        """Explicit level if one was set, otherwise the verbosity's level."""
        if self.global_level:
            return self.global_level.upper()
        return {
            VerbosityLevel.QUIET: "WARNING",
            VerbosityLevel.NORMAL: "INFO",
            VerbosityLevel.VERBOSE: "DEBUG",
        }[self.verbosity]


def handlers_from_names(
    names: str, log_file: Optional[str] = None
) -> List[HandlerConfig]:
    """Build handler configurations from a comma-separated list of names."""
    handler_configs = []
    for handler_name in names.split(","):
        handler_name = handler_name.strip().lower()
        if handler_name == "console":
            handler_configs.append(HandlerConfig(type=LogHandler.CONSOLE))
        elif handler_name == "file":
            handler_configs.append(
                HandlerConfig(type=LogHandler.FILE, filename=log_file or DEFAULT_LOG_FILE)
            )
        elif handler_name == "rotating":
            handler_configs.append(
                HandlerConfig(
                    type=LogHandler.ROTATING_FILE,
                    filename=log_file or DEFAULT_LOG_FILE,
                )
            )
        elif handler_name == "null":
            handler_configs.append(HandlerConfig(type=LogHandler.NULL))
    return handler_configs


class ConfigurableAppLogger:
    """Configurable application logger with multiple handlers and verbosity control."""

    def __init__(self, config: Optional[LoggingConfig] = None):
        self.config = config or LoggingConfig()
        self._python_logger = logging.getLogger(self.config.logger_name)
        self._handlers: List[logging.Handler] = []
        self._setup_logging()

    def _setup_logging(self) -> None:
        """Set up Python logging based on configuration."""
        self._python_logger.setLevel(self.config.effective_level)

        for handler in self._handlers:
            self._python_logger.removeHandler(handler)
            handler.close()
        self._handlers.clear()
        self._python_logger.handlers.clear()

        for handler_config in self.config.handlers:
            handler = self._create_handler(handler_config)
            self._handlers.append(handler)
            self._python_logger.addHandler(handler)

        # Prevent propagation to root logger to avoid duplicate messages
        self._python_logger.propagate = False

    def _create_handler(self, config: HandlerConfig) -> logging.Handler:
        """Create a logging handler from configuration."""
        if config.type == LogHandler.CONSOLE:
            stream = sys.stdout if config.stream == "stdout" else sys.stderr
            handler: logging.Handler = logging.StreamHandler(stream)
        elif config.type in (LogHandler.FILE, LogHandler.ROTATING_FILE):
            if not config.filename:
                raise ValueError(f"{config.type.value} handler requires filename")
            Path(config.filename).parent.mkdir(parents=True, exist_ok=True)
            if config.type == LogHandler.FILE:
                handler = logging.FileHandler(config.filename)
            else:
                handler = logging.handlers.RotatingFileHandler(
                    filename=config.filename,
                    maxBytes=config.max_bytes,
                    backupCount=config.backup_count,
                )
        elif config.type == LogHandler.NULL:
            return logging.NullHandler()
        else:
            raise ValueError(f"Unknown handler type: {config.type}")

        handler.setLevel(config.level or self.config.effective_level)
        handler.setFormatter(
            self._create_formatter(config.format or self.config.global_format, config)
        )
        return handler

    @staticmethod
    def _create_formatter(
        format_type: LogFormat, config: HandlerConfig
    ) -> logging.Formatter:
        if format_type == LogFormat.SIMPLE:
            return logging.Formatter("%(levelname)s: %(message)s")
        if format_type == LogFormat.DETAILED:
            return logging.Formatter(
                fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt=config.date_format,
            )
        # JSON lines are fully formatted by _format_message
        return logging.Formatter("%(message)s")

    def should_log_component(self, component: str) -> bool:
        """Check if a component should be logged based on filters."""
        if component in self.config.exclude_components:
            return False
        if self.config.include_only_components:
            return component in self.config.include_only_components
        return True

    def reconfigure(self, new_config: LoggingConfig) -> None:
        """Reconfigure logging with new settings."""
        self.config = new_config
        self._setup_logging()

    def _format_message(
        self, message: str, context: Optional[LogContext] = None, **kwargs
    ) -> str:
        structured = self.config.global_format == LogFormat.STRUCTURED
        return format_message(message, context, structured=structured, **kwargs)

    def _log(
        self,
        level: int,
        message: str,
        context: Optional[LogContext],
        exc_info: ExcInfo = False,
        **kwargs,
    ) -> None:
        if context and not self.should_log_component(context.component):
            return
        self._python_logger.log(
            level, self._format_message(message, context, **kwargs), exc_info=exc_info
        )

    def debug(
        self, message: str, context: Optional[LogContext] = None, **kwargs
    ) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, message, context, **kwargs)

    def info(
        self, message: str, context: Optional[LogContext] = None, **kwargs
    ) -> None:
        """Log info message."""
        self._log(logging.INFO, message, context, **kwargs)

    def warning(
        self, message: str, context: Optional[LogContext] = None, **kwargs
    ) -> None:
        """Log warning message."""
        self._log(logging.WARNING, message, context, **kwargs)

    def error(
        self,
        message: str,
        context: Optional[LogContext] = None,
        exc_info: ExcInfo = False,
        **kwargs,
    ) -> None:
        """Log error message."""
        self._log(logging.ERROR, message, context, exc_info=exc_info, **kwargs)


def create_logger_from_env() -> AppLogger:
    """Create logger from SPECDOC_LOG_* environment variables."""
    config = LoggingConfig()

    verbosity_str = os.getenv("SPECDOC_LOG_VERBOSITY", "normal").lower()
    verbosity_map = {
        "quiet": VerbosityLevel.QUIET,
        "normal": VerbosityLevel.NORMAL,
        "verbose": VerbosityLevel.VERBOSE,
        "v": VerbosityLevel.VERBOSE,
    }
    config.verbosity = verbosity_map.get(verbosity_str, VerbosityLevel.NORMAL)

    if level := os.getenv("SPECDOC_LOG_LEVEL"):
        config.global_level = level.upper()

    format_str = os.getenv("SPECDOC_LOG_FORMAT", "simple").lower()
    config.global_format = FORMAT_NAMES.get(format_str, LogFormat.SIMPLE)

    handler_configs = handlers_from_names(
        os.getenv("SPECDOC_LOG_HANDLERS", "console"), os.getenv("SPECDOC_LOG_FILE")
    )
    if handler_configs:
        config.handlers = handler_configs

    if exclude := os.getenv("SPECDOC_LOG_EXCLUDE"):
        config.exclude_components = [c.strip() for c in exclude.split(",")]

    if include := os.getenv("SPECDOC_LOG_INCLUDE_ONLY"):
        config.include_only_components = [c.strip() for c in include.split(",")]

    return ConfigurableAppLogger(config)
