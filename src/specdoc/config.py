"""
Build configuration: where the sources live, where output goes, and how the
dev server binds.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]

DEFAULT_SPEC_DIR = "spec"
DEFAULT_OUTPUT_DIR = "build"
DEFAULT_METADATA_FILE = "metadata.json"
DEFAULT_INDEX_TITLE = "Specification Versions"
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8080


@dataclass(frozen=True)
class BuildConfig:
    """Resolved, absolute locations and settings for one project."""

    root: Path
    spec_dir: Path
    output_dir: Path
    metadata_path: Path
    index_title: str = DEFAULT_INDEX_TITLE
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @classmethod
    def from_root(
        cls,
        root: PathLike = ".",
        spec_dir: Optional[PathLike] = None,
        output_dir: Optional[PathLike] = None,
        metadata: Optional[PathLike] = None,
        index_title: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
    ) -> "BuildConfig":
        """
        Derive a configuration from a project root.

        Relative ``spec_dir`` and ``output_dir`` resolve against the root; a
        relative ``metadata`` path resolves against the spec directory.
        """
        root_path = Path(root).expanduser().resolve()
        spec_path = root_path / (spec_dir or DEFAULT_SPEC_DIR)
        output_path = root_path / (output_dir or DEFAULT_OUTPUT_DIR)
        metadata_path = spec_path / (metadata or DEFAULT_METADATA_FILE)
        return cls(
            root=root_path,
            spec_dir=spec_path.resolve(),
            output_dir=output_path.resolve(),
            metadata_path=metadata_path.resolve(),
            index_title=index_title or DEFAULT_INDEX_TITLE,
            host=host or DEFAULT_HOST,
            port=DEFAULT_PORT if port is None else port,
        )

    def relative(self, path: PathLike) -> str:
        """Path relative to the project root for log lines, absolute if outside it."""
        resolved = Path(path).resolve()
        try:
            return str(resolved.relative_to(self.root))
        except ValueError:
            return str(resolved)
