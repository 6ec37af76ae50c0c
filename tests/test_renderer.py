"""
Tests for the SpecRenderer class and the Markdown render engine.
"""

import asyncio
from pathlib import Path

import pytest

from specdoc.config import BuildConfig
from specdoc.errors import RenderError
from specdoc.renderer import MarkdownEngine, SpecRenderer


class TestSpecRenderer:
    """Test cases for SpecRenderer class."""

    def test_output_path(self, project: BuildConfig, fake_engine):
        renderer = SpecRenderer(fake_engine, project.output_dir)

        assert renderer.output_path(project.spec_dir / "a-v1.md") == (
            project.output_dir / "a-v1.html"
        )

    def test_render_writes_engine_output(self, project: BuildConfig, fake_engine):
        renderer = SpecRenderer(fake_engine, project.output_dir)
        spec_path = project.spec_dir / "a-v1.md"
        metadata = {"title": "Spec"}

        output_path = asyncio.run(renderer.render(spec_path, metadata))

        assert output_path == project.output_dir / "a-v1.html"
        assert output_path.read_text() == fake_engine.render(spec_path, metadata)
        assert fake_engine.calls[0] == ("a-v1.md", metadata)

    def test_render_is_idempotent(self, project: BuildConfig):
        renderer = SpecRenderer(MarkdownEngine(), project.output_dir)
        spec_path = project.spec_dir / "a-v2.md"

        first = asyncio.run(renderer.render(spec_path, {})).read_bytes()
        second = asyncio.run(renderer.render(spec_path, {})).read_bytes()

        assert first == second

    def test_render_overwrites_existing_page(self, project: BuildConfig, fake_engine):
        project.output_dir.mkdir()
        stale = project.output_dir / "a-v1.html"
        stale.write_text("stale")
        renderer = SpecRenderer(fake_engine, project.output_dir)

        asyncio.run(renderer.render(project.spec_dir / "a-v1.md", {}))

        assert "First version." in stale.read_text()

    def test_render_logs_source_and_destination(
        self, project: BuildConfig, fake_engine, recording_logger
    ):
        renderer = SpecRenderer(
            fake_engine,
            project.output_dir,
            display_path=project.relative,
            logger=recording_logger,
        )

        asyncio.run(renderer.render(project.spec_dir / "a-v1.md", {}))

        assert recording_logger.messages("info") == [
            "Built spec/a-v1.md -> build/a-v1.html"
        ]

    def test_engine_failure_is_wrapped(self, project: BuildConfig, failing_engine):
        renderer = SpecRenderer(failing_engine, project.output_dir)

        with pytest.raises(RenderError, match="cannot render a-v1.md"):
            asyncio.run(renderer.render(project.spec_dir / "a-v1.md", {}))

        assert not (project.output_dir / "a-v1.html").exists()

    def test_missing_source_raises_oserror(self, project: BuildConfig, fake_engine):
        renderer = SpecRenderer(fake_engine, project.output_dir)

        with pytest.raises(OSError):
            asyncio.run(renderer.render(project.spec_dir / "gone-v5.md", {}))


class TestMarkdownEngine:
    """Test cases for MarkdownEngine."""

    def test_renders_markdown_body(self, temp_dir: Path):
        source = temp_dir / "s-v1.md"
        source.write_text("# Title\n\nSome *emphasis* here.\n")

        html = MarkdownEngine().render(source, {})

        assert "<em>emphasis</em>" in html
        assert "<title>Title</title>" in html

    def test_title_from_metadata(self, temp_dir: Path):
        source = temp_dir / "s-v1.md"
        source.write_text("# Heading\n")

        html = MarkdownEngine().render(source, {"title": "From Metadata"})

        assert "<title>From Metadata</title>" in html

    def test_title_falls_back_to_basename(self, temp_dir: Path):
        source = temp_dir / "s-v1.md"
        source.write_text("No heading here.\n")

        assert "<title>s-v1</title>" in MarkdownEngine().render(source, None)

    def test_head_and_source_link(self, temp_dir: Path):
        source = temp_dir / "s-v1.md"
        source.write_text("# Spec\n")
        options = {
            "head": '<link rel="icon" href="favicon.ico">',
            "githubSource": "https://github.com/example/spec/blob/main/spec/",
        }

        html = MarkdownEngine().render(source, options)

        assert '<link rel="icon" href="favicon.ico">' in html
        assert 'href="https://github.com/example/spec/blob/main/spec/s-v1.md"' in html

    def test_invalid_utf8(self, temp_dir: Path):
        source = temp_dir / "s-v1.md"
        source.write_bytes(b"\xff\xfe\x00\x80")

        with pytest.raises(RenderError):
            MarkdownEngine().render(source, {})
