"""
Spec renderer: turns one Markdown document into one HTML page on disk.

The Markdown-to-HTML step sits behind the ``RenderEngine`` protocol so the
build logic can run against a fake engine. ``MarkdownEngine`` is the
production engine, built on Python-Markdown and a jinja2 page template.
"""

import asyncio
import re
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Protocol

import markdown
from jinja2 import Environment

from specdoc.app_logger import AppLogger, LogContext, get_default_logger
from specdoc.errors import RenderError, SpecdocError

OUTPUT_EXTENSION = ".html"
DEFAULT_EXTENSIONS = ["extra", "toc", "sane_lists"]
HEADING_PATTERN = re.compile(r"^#\s+(.+?)\s*#*\s*$", re.MULTILINE)

PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{{ title }}</title>
    <style>
      body {
        color: #333333;
        font: 13pt/18pt Cambria, 'Palatino Linotype', Palatino, 'Liberation Serif', serif;
        margin: 3rem auto;
        max-width: 780px;
        padding: 0 1rem;
      }
      a { color: #3B5998; text-decoration: none; }
      a:hover { text-decoration: underline; }
      pre, code { font-family: Consolas, Monaco, monospace; font-size: 10.5pt; }
      pre { background: #f8f8f8; padding: 1em; overflow: auto; }
      .source-link { float: right; font-size: 10pt; }
    </style>
{% if head %}
    {{ head | safe }}
{% endif %}
  </head>
  <body>
{% if source_url %}
    <a class="source-link" href="{{ source_url }}">View source</a>
{% endif %}
{{ body | safe }}
  </body>
</html>
"""


class RenderEngine(Protocol):
    """Renders one Markdown document, with the build metadata, to HTML text."""

    def render(self, path: Path, options: Any) -> str: ...


class MarkdownEngine:
    """
    Render engine backed by Python-Markdown.

    Understood metadata keys, all optional: ``title``, ``extensions``,
    ``head`` (raw HTML for the page head) and ``githubSource`` (URL prefix
    for a "View source" link). Other keys are ignored.
    """

    def __init__(self) -> None:
        self._template = Environment(autoescape=True, trim_blocks=True).from_string(
            PAGE_TEMPLATE
        )

    def render(self, path: Path, options: Any) -> str:
        path = Path(path)
        settings: Mapping[str, Any] = options if isinstance(options, Mapping) else {}
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise RenderError(f"{path} is not valid UTF-8: {e}") from e

        extensions: List[str] = list(settings.get("extensions", DEFAULT_EXTENSIONS))
        converter = markdown.Markdown(extensions=extensions, output_format="html")
        body = converter.convert(text)

        source = settings.get("githubSource")
        return self._template.render(
            title=settings.get("title") or self._title_of(text, path),
            head=settings.get("head"),
            source_url=f"{source}{path.name}" if source else None,
            body=body,
        )

    @staticmethod
    def _title_of(text: str, path: Path) -> str:
        match = HEADING_PATTERN.search(text)
        return match.group(1) if match else path.stem


class SpecRenderer:
    """Renders specs through an engine and writes the pages to the output directory."""

    def __init__(
        self,
        engine: RenderEngine,
        output_dir: Path,
        display_path: Optional[Callable[[Path], str]] = None,
        logger: Optional[AppLogger] = None,
    ):
        """
        Initialise the renderer.

        Args:
            engine: Markdown-to-HTML engine
            output_dir: Directory receiving ``<basename>.html`` files
            display_path: Formats paths for log lines, defaults to ``str``
            logger: Application logger, defaults to the process-wide one
        """
        self.engine = engine
        self.output_dir = Path(output_dir).expanduser().resolve()
        self._display_path = display_path or str
        self._logger = logger or get_default_logger()
        self._log_context = LogContext(component="SpecRenderer", operation="render")

    def output_path(self, spec_path: Path) -> Path:
        return self.output_dir / f"{Path(spec_path).stem}{OUTPUT_EXTENSION}"

    def _render_to_disk(self, spec_path: Path, metadata: Any) -> Path:
        try:
            html = self.engine.render(spec_path, metadata)
        except (SpecdocError, OSError):
            raise
        except Exception as e:
            raise RenderError(f"Failed to render {spec_path}: {e}") from e

        output_path = self.output_path(spec_path)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        return output_path

    async def render(self, spec_path: Path, metadata: Any) -> Path:
        """
        Render one spec and write it to ``<output_dir>/<basename>.html``.

        An existing page is overwritten. Failures are raised to the caller,
        who decides whether sibling renders carry on.

        Args:
            spec_path: Markdown source file
            metadata: Options passed unmodified to the engine

        Returns:
            Path of the written HTML file

        Raises:
            RenderError: If the engine fails
            OSError: If the source cannot be read or the page cannot be written
        """
        output_path = await asyncio.to_thread(self._render_to_disk, Path(spec_path), metadata)
        self._logger.info(
            f"Built {self._display_path(Path(spec_path))} -> {self._display_path(output_path)}",
            context=self._log_context,
        )
        return output_path
