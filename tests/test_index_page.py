"""
Tests for the index page generator.
"""

from pathlib import Path

from specdoc.discovery import SpecDescriptor
from specdoc.index_page import render_index


def _descriptor(version: int, basename: str) -> SpecDescriptor:
    return SpecDescriptor(version=version, path=Path(f"/spec/{basename}.md"), basename=basename)


def _rows(html: str):
    return html.split("<tr>")[1:]


class TestRenderIndex:
    """Test cases for render_index."""

    def test_latest_release_marks_first_row_only(self):
        html = render_index([_descriptor(2, "a-v2"), _descriptor(1, "a-v1")])
        rows = _rows(html)

        assert len(rows) == 2
        assert "<em>Latest Release</em>" in rows[0]
        assert 'href="a-v2.html"' in rows[0]
        assert "Latest Release" not in rows[1]
        assert 'href="a-v1.html"' in rows[1]

    def test_links_keep_hash(self):
        html = render_index([_descriptor(1, "a-v1")])

        assert '<a href="a-v1.html" keep-hash>Version 1</a>' in html
        assert "link.href += location.hash" in html

    def test_title_and_heading(self):
        html = render_index([], title="Widget Spec Versions", heading="Widget Spec")

        assert "<title>Widget Spec Versions</title>" in html
        assert "<h1>Widget Spec</h1>" in html

    def test_heading_defaults_to_title(self):
        html = render_index([], title="Widget Spec Versions")

        assert "<h1>Widget Spec Versions</h1>" in html

    def test_empty_list_has_no_rows(self):
        assert _rows(render_index([])) == []

    def test_escapes_text(self):
        html = render_index([_descriptor(1, "a&b-v1")], title="<Spec>")

        assert "<title>&lt;Spec&gt;</title>" in html
        assert 'href="a&amp;b-v1.html"' in html

    def test_is_deterministic(self):
        descriptors = [_descriptor(2, "a-v2"), _descriptor(1, "a-v1")]

        assert render_index(descriptors) == render_index(descriptors)
