"""
Tests for the DevServer class.
"""

import urllib.request
from pathlib import Path

import pytest

from specdoc.dev_server import DevServer


@pytest.fixture
def site(temp_dir: Path) -> Path:
    (temp_dir / "index.html").write_text("<html>index</html>")
    return temp_dir


class TestDevServer:
    """Test cases for DevServer class."""

    def test_serves_output_directory(self, site: Path, recording_logger):
        server = DevServer(site, port=0, logger=recording_logger)
        url = server.start()
        try:
            assert server.is_running()
            assert url.startswith("http://localhost:")
            with urllib.request.urlopen(url + "index.html", timeout=5) as response:
                assert response.read() == b"<html>index</html>"
        finally:
            server.stop()

        assert not server.is_running()
        assert server.url is None
        assert any(m.startswith("Serving ") for m in recording_logger.messages("info"))

    def test_request_log_goes_to_app_logger(self, site: Path, recording_logger):
        server = DevServer(site, port=0, logger=recording_logger)
        url = server.start()
        try:
            with urllib.request.urlopen(url + "index.html", timeout=5):
                pass
        finally:
            server.stop()

        assert any("GET /index.html" in m for m in recording_logger.messages("debug"))

    def test_start_twice_is_rejected(self, site: Path):
        server = DevServer(site, port=0)
        server.start()
        try:
            with pytest.raises(RuntimeError):
                server.start()
        finally:
            server.stop()

    def test_stop_without_start(self, site: Path):
        DevServer(site, port=0).stop()
