"""
Site builder: owns the build context and runs full builds.

The builder ties discovery, metadata loading and rendering together. The
watch controller drives the same builder for incremental rebuilds, so both
modes share one ``BuildContext``.
"""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Optional

from specdoc.app_logger import AppLogger, LogContext, get_default_logger
from specdoc.config import BuildConfig
from specdoc.discovery import SpecDescriptor, SpecDiscovery
from specdoc.errors import log_failure
from specdoc.metadata import MetadataLoader
from specdoc.renderer import MarkdownEngine, RenderEngine, SpecRenderer

FULL_BUILD_LABEL = "Full Build"


@dataclass
class BuildContext:
    """Current metadata and descriptor list shared by every rebuild."""

    metadata: Optional[Any] = None
    metadata_loaded: bool = False
    descriptors: List[SpecDescriptor] = field(default_factory=list)

    @property
    def spec_paths(self) -> List[Path]:
        return [descriptor.path for descriptor in self.descriptors]


@dataclass
class BuildResult:
    """Outcome of a full build."""

    built: List[Path] = field(default_factory=list)
    failures: List[BaseException] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class SiteBuilder:
    """
    Orchestrates metadata loading, spec discovery and rendering.

    All collaborators can be replaced, which is how the tests drive the
    build with a fake render engine.
    """

    def __init__(
        self,
        config: BuildConfig,
        engine: Optional[RenderEngine] = None,
        logger: Optional[AppLogger] = None,
    ):
        self.config = config
        self._logger = logger or get_default_logger()
        self._log_context = LogContext(component="SiteBuilder")
        self.context = BuildContext()
        self.metadata_loader = MetadataLoader(config.metadata_path, logger=self._logger)
        self.discovery = SpecDiscovery(
            config.spec_dir,
            config.output_dir,
            index_title=config.index_title,
            logger=self._logger,
        )
        self.renderer = SpecRenderer(
            engine or MarkdownEngine(),
            config.output_dir,
            display_path=config.relative,
            logger=self._logger,
        )

    def prepare_output(self) -> None:
        """Create the output directory if it does not exist yet."""
        self.config.output_dir.mkdir(parents=True, exist_ok=True)

    async def reload_metadata(self) -> Any:
        """Load the metadata file and make it current; the old value stays on failure."""
        metadata = await self.metadata_loader.aload()
        self.context.metadata = metadata
        self.context.metadata_loaded = True
        return metadata

    async def current_metadata(self) -> Any:
        """Current metadata, loading it first if no load has succeeded yet."""
        if not self.context.metadata_loaded:
            return await self.reload_metadata()
        return self.context.metadata

    async def refresh_specs(self) -> List[SpecDescriptor]:
        """Rediscover specs, rewrite the index and replace the descriptor list."""
        descriptors = await self.discovery.refresh()
        self.context.descriptors = descriptors
        return descriptors

    async def render_spec(self, spec_path: Path) -> Path:
        """Render one spec with the current metadata."""
        metadata = await self.current_metadata()
        return await self.renderer.render(spec_path, metadata)

    async def render_all(
        self, spec_paths: Iterable[Path], label: str = FULL_BUILD_LABEL
    ) -> BuildResult:
        """
        Render specs concurrently with the current metadata.

        A failing spec is logged under ``label`` and does not cancel or
        block the others.
        """
        paths = list(spec_paths)
        metadata = await self.current_metadata()
        outcomes = await asyncio.gather(
            *(self.renderer.render(path, metadata) for path in paths),
            return_exceptions=True,
        )

        result = BuildResult()
        for path, outcome in zip(paths, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                log_failure(f"{label}: {self.config.relative(path)}", outcome, self._logger)
                result.failures.append(outcome)
            else:
                result.built.append(outcome)
        return result

    async def full_build(self) -> BuildResult:
        """
        Discover every spec and render them all.

        Metadata loading and discovery run independently, so a broken
        metadata file still leaves the index and descriptor list in place
        for the watcher. Rendering is skipped when no metadata loaded.
        Failures are logged and reported in the result rather than raised.
        """
        self.prepare_output()
        outcomes = await asyncio.gather(
            self.reload_metadata(), self.refresh_specs(), return_exceptions=True
        )

        result = BuildResult()
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                log_failure(FULL_BUILD_LABEL, outcome, self._logger)
                result.failures.append(outcome)

        if self.context.metadata_loaded:
            rendered = await self.render_all(self.context.spec_paths)
            result.built.extend(rendered.built)
            result.failures.extend(rendered.failures)

        self._logger.info(
            "Full build finished",
            context=self._log_context.with_operation("full_build"),
            built=len(result.built),
            failed=len(result.failures),
        )
        return result
