"""
Tests for BuildConfig.
"""

from pathlib import Path

from specdoc.config import DEFAULT_PORT, BuildConfig


class TestBuildConfig:
    """Test cases for BuildConfig.from_root."""

    def test_defaults(self, temp_dir: Path):
        config = BuildConfig.from_root(temp_dir)

        assert config.root == temp_dir
        assert config.spec_dir == temp_dir / "spec"
        assert config.output_dir == temp_dir / "build"
        assert config.metadata_path == temp_dir / "spec" / "metadata.json"
        assert config.host == "localhost"
        assert config.port == DEFAULT_PORT

    def test_overrides(self, temp_dir: Path):
        config = BuildConfig.from_root(
            temp_dir,
            spec_dir="docs",
            output_dir="public",
            metadata="options.json",
            port=0,
        )

        assert config.spec_dir == temp_dir / "docs"
        assert config.output_dir == temp_dir / "public"
        assert config.metadata_path == temp_dir / "docs" / "options.json"
        assert config.port == 0

    def test_absolute_output_dir(self, temp_dir: Path):
        elsewhere = temp_dir / "elsewhere"
        config = BuildConfig.from_root(temp_dir / "project", output_dir=elsewhere)

        assert config.output_dir == elsewhere

    def test_relative(self, temp_dir: Path):
        config = BuildConfig.from_root(temp_dir)

        assert config.relative(temp_dir / "spec" / "a-v1.md") == "spec/a-v1.md"
        assert config.relative("/outside/file.md") == "/outside/file.md"
