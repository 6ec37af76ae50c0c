"""
Spec discovery: finds the versioned Markdown documents in the spec directory.

Discovery and index generation run together: every discovery pass rewrites
``index.html`` so the listing always matches the last scan.
"""

import asyncio
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from specdoc.app_logger import AppLogger, LogContext, get_default_logger
from specdoc.config import DEFAULT_INDEX_TITLE
from specdoc.errors import DiscoveryError
from specdoc.index_page import render_index

SPEC_EXTENSION = ".md"
INDEX_FILENAME = "index.html"
VERSION_PATTERN = re.compile(r"v(\d+)")


@dataclass(frozen=True)
class SpecDescriptor:
    """One versioned spec document."""

    version: int
    path: Path
    basename: str


def parse_version(filename: str) -> Optional[int]:
    """Return the first ``v<digits>`` number in a file name, or None."""
    match = VERSION_PATTERN.search(filename)
    if match is None:
        return None
    return int(match.group(1))


class SpecDiscovery:
    """
    Scans the spec directory and keeps the index page in step with it.

    Only direct children of the spec directory with a ``.md`` extension and
    a version token in their name are specs. Anything else is skipped
    without complaint.
    """

    def __init__(
        self,
        spec_dir: Path,
        output_dir: Path,
        index_title: str = DEFAULT_INDEX_TITLE,
        logger: Optional[AppLogger] = None,
    ):
        """
        Initialise discovery for a spec directory.

        Args:
            spec_dir: Directory holding the Markdown sources
            output_dir: Directory that receives ``index.html``
            index_title: Title of the generated index page
            logger: Application logger, defaults to the process-wide one
        """
        self.spec_dir = Path(spec_dir).expanduser().resolve()
        self.output_dir = Path(output_dir).expanduser().resolve()
        self.index_title = index_title
        self._logger = logger or get_default_logger()
        self._log_context = LogContext(component="SpecDiscovery")

    @property
    def index_path(self) -> Path:
        return self.output_dir / INDEX_FILENAME

    def scan(self) -> List[SpecDescriptor]:
        """
        List the versioned specs, newest first.

        Returns:
            Descriptors sorted by version descending, ties by basename

        Raises:
            DiscoveryError: If the spec directory cannot be listed
        """
        try:
            entries = list(self.spec_dir.iterdir())
        except OSError as e:
            raise DiscoveryError(f"Cannot list spec directory {self.spec_dir}: {e}") from e

        descriptors = []
        for entry in entries:
            if entry.suffix != SPEC_EXTENSION or not entry.is_file():
                continue
            version = parse_version(entry.name)
            if version is None:
                self._logger.debug(
                    "Skipping unversioned file",
                    context=self._log_context,
                    file_path=entry.name,
                )
                continue
            descriptors.append(
                SpecDescriptor(version=version, path=entry, basename=entry.stem)
            )

        descriptors.sort(key=lambda d: d.basename)
        descriptors.sort(key=lambda d: d.version, reverse=True)
        return descriptors

    def write_index(self, descriptors: List[SpecDescriptor]) -> Path:
        """Render the index page for ``descriptors`` and write it to disk."""
        html = render_index(descriptors, title=self.index_title)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.index_path.write_text(html, encoding="utf-8")
        return self.index_path

    async def refresh(self) -> List[SpecDescriptor]:
        """
        Rescan the spec directory and rewrite the index page.

        Returns:
            The fresh descriptor list
        """
        descriptors = await asyncio.to_thread(self.scan)
        index_path = await asyncio.to_thread(self.write_index, descriptors)
        self._logger.info(
            f"Built {index_path.name}",
            context=self._log_context.with_operation("refresh"),
            spec_count=len(descriptors),
        )
        return descriptors
