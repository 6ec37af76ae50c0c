"""
Watch controller: turns file-system events into incremental rebuilds.

Events are queued and consumed by a single loop. Each event is classified
into one ``Reaction`` and the reaction runs as its own task, so a slow
render for one file never holds up events for another.

    .md added        refresh specs and index, then render the file
    .md modified     render the file
    .md deleted      refresh specs and index only
    metadata file    reload metadata, then render every current spec
"""

import asyncio
from enum import Enum
from pathlib import Path
from typing import AsyncIterable, Optional, Set

from specdoc.app_logger import AppLogger, LogContext, get_default_logger
from specdoc.builder import SiteBuilder
from specdoc.discovery import SPEC_EXTENSION
from specdoc.errors import log_failure
from specdoc.events import ChangeKind, WatchEvent


class Reaction(Enum):
    """Rebuild action for one classified event."""

    SPEC_ADDED = "spec_added"
    SPEC_MODIFIED = "spec_modified"
    SPEC_REMOVED = "spec_removed"
    METADATA_CHANGED = "metadata_changed"


_SPEC_REACTIONS = {
    ChangeKind.ADDED: Reaction.SPEC_ADDED,
    ChangeKind.MODIFIED: Reaction.SPEC_MODIFIED,
    ChangeKind.DELETED: Reaction.SPEC_REMOVED,
}


def classify(event: WatchEvent, spec_dir: Path, metadata_path: Path) -> Optional[Reaction]:
    """
    Map an event to its reaction, or None when the event is irrelevant.

    Only the metadata file and Markdown files directly inside the spec
    directory matter.
    """
    path = Path(event.path).resolve()
    if path == Path(metadata_path).resolve():
        return Reaction.METADATA_CHANGED
    if path.parent != Path(spec_dir).resolve() or path.suffix != SPEC_EXTENSION:
        return None
    return _SPEC_REACTIONS[event.kind]


class WatchController:
    """Consumes watch events and applies them to a ``SiteBuilder``."""

    def __init__(self, builder: SiteBuilder, logger: Optional[AppLogger] = None):
        self.builder = builder
        self._logger = logger or get_default_logger()
        self._log_context = LogContext(component="WatchController")
        self._queue: "asyncio.Queue[Optional[WatchEvent]]" = asyncio.Queue()
        self._tasks: Set["asyncio.Task[None]"] = set()

    def classify(self, event: WatchEvent) -> Optional[Reaction]:
        config = self.builder.config
        return classify(event, config.spec_dir, config.metadata_path)

    def submit(self, event: WatchEvent) -> None:
        """Queue an event for the controller loop."""
        self._queue.put_nowait(event)

    def stop(self) -> None:
        """Ask ``run`` to return once the events queued so far are handled."""
        self._queue.put_nowait(None)

    async def pump(self, source: AsyncIterable[WatchEvent]) -> None:
        """Forward every event from ``source`` into the queue."""
        async for event in source:
            self.submit(event)

    async def run(self) -> None:
        """
        Controller loop.

        Runs until ``stop`` is called, then waits for in-flight reactions.
        """
        while True:
            event = await self._queue.get()
            if event is None:
                break
            if self.classify(event) is None:
                continue
            task = asyncio.create_task(self.handle(event))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

        if self._tasks:
            await asyncio.gather(*self._tasks)

    async def handle(self, event: WatchEvent) -> None:
        """Apply one event; failures are logged and never raised."""
        reaction = self.classify(event)
        if reaction is None:
            return

        label = f"{self.builder.config.relative(event.path)}:{event.kind.value}"
        self._logger.info(
            f"Change Detected: {self.builder.config.relative(event.path)} @ {event.kind.value}",
            context=self._log_context.with_operation(reaction.value),
        )
        try:
            await self._react(reaction, Path(event.path), label)
        except Exception as e:
            log_failure(label, e, self._logger)

    async def _react(self, reaction: Reaction, path: Path, label: str) -> None:
        if reaction is Reaction.METADATA_CHANGED:
            await self.builder.reload_metadata()
            await self.builder.render_all(self.builder.context.spec_paths, label=label)
            return

        if reaction is Reaction.SPEC_REMOVED:
            self._logger.info("Refreshing Specs", context=self._log_context)
            await self.builder.refresh_specs()
            return

        if reaction is Reaction.SPEC_ADDED:
            self._logger.info("Refreshing Specs", context=self._log_context)
            try:
                await self.builder.refresh_specs()
            except Exception as e:
                # the new file is still rendered even if the index is stale
                log_failure(label, e, self._logger)

        if reaction in (Reaction.SPEC_ADDED, Reaction.SPEC_MODIFIED):
            await self.builder.render_spec(path)
