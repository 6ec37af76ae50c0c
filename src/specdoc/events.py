"""
File-system change events and the sources that produce them.

The watch controller only sees ``WatchEvent`` values, so any async iterable
of events can drive it: ``WatchfilesEventSource`` in production, a plain
list wrapped in an async generator in the tests.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import AsyncIterator, Optional, Protocol

from watchfiles import Change, awatch

from specdoc.app_logger import AppLogger, LogContext, get_default_logger


class ChangeKind(Enum):
    """What happened to a watched file."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


@dataclass(frozen=True)
class WatchEvent:
    """A single observed change to one path."""

    kind: ChangeKind
    path: Path


class EventSource(Protocol):
    """Anything that yields watch events asynchronously."""

    def __aiter__(self) -> AsyncIterator[WatchEvent]: ...


_CHANGE_KINDS = {
    Change.added: ChangeKind.ADDED,
    Change.modified: ChangeKind.MODIFIED,
    Change.deleted: ChangeKind.DELETED,
}


class WatchfilesEventSource:
    """Event source backed by ``watchfiles.awatch`` on one directory."""

    def __init__(
        self,
        directory: Path,
        debounce_ms: int = 200,
        logger: Optional[AppLogger] = None,
    ):
        self.directory = Path(directory).expanduser().resolve()
        self.debounce_ms = debounce_ms
        self._stop_event = asyncio.Event()
        self._logger = logger or get_default_logger()
        self._log_context = LogContext(component="WatchfilesEventSource")

    def close(self) -> None:
        """Stop watching; iteration ends after the current batch."""
        self._stop_event.set()

    async def __aiter__(self) -> AsyncIterator[WatchEvent]:
        self._logger.debug(
            "Watching directory",
            context=self._log_context,
            directory=str(self.directory),
        )
        async for changes in awatch(
            self.directory, stop_event=self._stop_event, debounce=self.debounce_ms
        ):
            for change, raw_path in sorted(changes, key=lambda c: c[1]):
                yield WatchEvent(kind=_CHANGE_KINDS[change], path=Path(raw_path))
