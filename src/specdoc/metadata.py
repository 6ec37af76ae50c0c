"""
Metadata loader for the JSON options passed to every render call.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

from specdoc.app_logger import AppLogger, LogContext, get_default_logger
from specdoc.errors import MetadataError


class MetadataLoader:
    """Reads and parses the metadata JSON file at a fixed path."""

    def __init__(self, metadata_path: Path, logger: Optional[AppLogger] = None):
        self.metadata_path = Path(metadata_path)
        self._logger = logger or get_default_logger()
        self._log_context = LogContext(component="MetadataLoader")

    def load(self) -> Any:
        """
        Read the metadata file and return its parsed value.

        Returns:
            The decoded JSON value, passed unmodified to the render engine

        Raises:
            MetadataError: If the file is missing, unreadable or not valid JSON.
                Parse errors carry a ``(line, column)`` location.
        """
        try:
            text = self.metadata_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise MetadataError(
                f"Cannot read metadata {self.metadata_path}: {e}"
            ) from e

        try:
            metadata = json.loads(text)
        except json.JSONDecodeError as e:
            raise MetadataError(
                f"Invalid JSON in {self.metadata_path}:{e.lineno}:{e.colno}: {e.msg}",
                location=(e.lineno, e.colno),
            ) from e

        self._logger.debug(
            "Loaded metadata",
            context=self._log_context,
            metadata_path=str(self.metadata_path),
        )
        return metadata

    async def aload(self) -> Any:
        """Run ``load`` without blocking the event loop."""
        return await asyncio.to_thread(self.load)
