"""
Specdoc - builds versioned Markdown specifications into a static HTML site.

This package discovers the versioned spec documents in a directory, renders
each one to HTML, writes an index page linking every version, and can serve
the output locally while rebuilding incrementally on changes.
"""

__version__ = "1.0.0"

from .builder import BuildContext, BuildResult, SiteBuilder
from .config import BuildConfig
from .discovery import SpecDescriptor, SpecDiscovery
from .index_page import render_index
from .metadata import MetadataLoader
from .renderer import MarkdownEngine, RenderEngine, SpecRenderer
from .watcher import Reaction, WatchController

__all__ = [
    "__version__",
    "BuildConfig",
    "BuildContext",
    "BuildResult",
    "MarkdownEngine",
    "MetadataLoader",
    "Reaction",
    "RenderEngine",
    "SiteBuilder",
    "SpecDescriptor",
    "SpecDiscovery",
    "SpecRenderer",
    "WatchController",
    "render_index",
]
