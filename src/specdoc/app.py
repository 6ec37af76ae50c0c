"""
Top-level application: one full build, then optionally watch and serve.
"""

import asyncio
from typing import Optional, Protocol

from specdoc.app_logger import AppLogger, LogContext, get_default_logger
from specdoc.builder import BuildResult, SiteBuilder
from specdoc.config import BuildConfig
from specdoc.dev_server import DevServer
from specdoc.events import EventSource, WatchfilesEventSource
from specdoc.renderer import RenderEngine
from specdoc.watcher import WatchController


class PreviewServer(Protocol):
    """What watch mode needs from a dev server."""

    def start(self) -> Optional[str]: ...

    def stop(self) -> None: ...


class SpecdocApp:
    """
    Wires the builder, watcher and dev server together.

    The watcher's event source and the dev server are injectable so watch
    mode can run against synthetic events without touching the network.
    """

    def __init__(
        self,
        config: BuildConfig,
        engine: Optional[RenderEngine] = None,
        logger: Optional[AppLogger] = None,
    ):
        self.config = config
        self._logger = logger or get_default_logger()
        self._log_context = LogContext(component="SpecdocApp")
        self.builder = SiteBuilder(config, engine=engine, logger=self._logger)

    async def build(self) -> BuildResult:
        return await self.builder.full_build()

    async def watch(
        self,
        source: Optional[EventSource] = None,
        server: Optional[PreviewServer] = None,
    ) -> None:
        """
        Serve the output and rebuild on changes.

        Returns only when the event source is exhausted; the file-system
        source never is, so in practice this runs until interrupted.
        """
        if source is None:
            source = WatchfilesEventSource(self.config.spec_dir, logger=self._logger)
        if server is None:
            server = DevServer(
                self.config.output_dir,
                host=self.config.host,
                port=self.config.port,
                logger=self._logger,
            )

        controller = WatchController(self.builder, logger=self._logger)
        server.start()
        pump = asyncio.create_task(controller.pump(source))
        pump.add_done_callback(lambda _: controller.stop())
        self._logger.info(
            f"Watching {self.config.relative(self.config.spec_dir)} for changes",
            context=self._log_context,
        )
        try:
            await controller.run()
            await pump
        finally:
            pump.cancel()
            server.stop()
            close = getattr(source, "close", None)
            if close is not None:
                close()

    async def main(self, watch: bool = False) -> int:
        result = await self.build()
        if not watch:
            return 0 if result.ok else 1
        await self.watch()
        return 0

    def run(self, watch: bool = False) -> int:
        """
        Run the application to completion.

        Returns:
            Exit code: 1 if a one-shot build had failures, otherwise 0
        """
        try:
            return asyncio.run(self.main(watch=watch))
        except KeyboardInterrupt:
            self._logger.info("Received interrupt, shutting down", context=self._log_context)
            return 0
