"""
Shared test fixtures and configuration for specdoc tests.

This module provides temporary spec projects, a fake render engine and a
recording logger used across the test suite.
"""

import json
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional, Set

import pytest

from specdoc.app_logger import LogContext, NullAppLogger, set_default_logger
from specdoc.config import BuildConfig


@pytest.fixture(autouse=True)
def quiet_default_logger() -> Generator[None, None, None]:
    """Keep components that fall back to the default logger silent."""
    set_default_logger(NullAppLogger())
    yield
    set_default_logger(None)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for testing.

    Yields:
        Path to the temporary directory
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir).resolve()


@pytest.fixture
def project(temp_dir: Path) -> BuildConfig:
    """
    Create a spec project with two versions, an unversioned file and metadata.

    Returns:
        Build configuration rooted at the temporary directory
    """
    spec_dir = temp_dir / "spec"
    spec_dir.mkdir()
    (spec_dir / "a-v1.md").write_text("# Spec\n\nFirst version.\n")
    (spec_dir / "a-v2.md").write_text("# Spec\n\nSecond version.\n")
    (spec_dir / "notes.md").write_text("# Notes\n\nNot a spec.\n")
    (spec_dir / "metadata.json").write_text(json.dumps({"title": "Spec"}))
    return BuildConfig.from_root(temp_dir)


@dataclass
class LogRecord:
    level: str
    message: str
    context: Optional[LogContext]
    exc_info: Any = False
    extra: Dict[str, Any] = field(default_factory=dict)


class RecordingLogger:
    """AppLogger that keeps every record for assertions."""

    def __init__(self):
        self.records: List[LogRecord] = []

    def _record(self, level, message, context, exc_info=False, **kwargs):
        self.records.append(LogRecord(level, message, context, exc_info, kwargs))

    def debug(self, message, context=None, **kwargs):
        self._record("debug", message, context, **kwargs)

    def info(self, message, context=None, **kwargs):
        self._record("info", message, context, **kwargs)

    def warning(self, message, context=None, **kwargs):
        self._record("warning", message, context, **kwargs)

    def error(self, message, context=None, exc_info=False, **kwargs):
        self._record("error", message, context, exc_info, **kwargs)

    def messages(self, level: Optional[str] = None) -> List[str]:
        return [r.message for r in self.records if level is None or r.level == level]


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


class FakeEngine:
    """Render engine producing a predictable page from the file and options."""

    def __init__(self, fail_on: Optional[Set[str]] = None):
        self.fail_on = fail_on or set()
        self.calls: List[tuple] = []

    def render(self, path: Path, options: Any) -> str:
        path = Path(path)
        self.calls.append((path.name, options))
        if path.name in self.fail_on:
            raise RuntimeError(f"cannot render {path.name}")
        body = path.read_text(encoding="utf-8")
        return f"<html><!-- {json.dumps(options, sort_keys=True)} -->{body}</html>"

    def rendered(self) -> List[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def failing_engine() -> FakeEngine:
    """Engine that fails for a-v1.md and renders everything else."""
    return FakeEngine(fail_on={"a-v1.md"})
