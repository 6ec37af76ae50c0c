"""
Exception types raised by the build pipeline, and the shared failure logger.

Every failure in a build is surfaced through ``log_failure``: errors that
point at a position in a source file (they carry a ``location``) are
reported with their message only, everything else with a full traceback.
"""

from typing import Any, Optional

from specdoc.app_logger import AppLogger, LogContext, get_default_logger


class SpecdocError(Exception):
    """Base class for build pipeline errors."""

    def __init__(self, message: str, location: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.location = location


class MetadataError(SpecdocError):
    """The metadata file could not be read or parsed."""


class DiscoveryError(SpecdocError):
    """The spec directory could not be listed."""


class RenderError(SpecdocError):
    """A spec document could not be rendered to HTML."""


def log_failure(
    label: str, error: BaseException, logger: Optional[AppLogger] = None
) -> None:
    """
    Log a build failure under a label naming the operation that triggered it.

    Args:
        label: Context label, e.g. ``Full Build`` or ``spec/a-v1.md:modified``
        error: The exception that was raised
        logger: Logger to use, defaults to the process-wide logger
    """
    logger = logger or get_default_logger()
    context = LogContext(component="Build", operation=label)
    if getattr(error, "location", None):
        logger.error(f"{label}: {error}", context=context)
    else:
        logger.error(f"{label}: {error!r}", context=context, exc_info=error)
