"""Shared fixtures for the textdiff test suite."""

import pytest

from PyQt6.QtCore import QCoreApplication

from textdiff.core.models import DiffMode, DiffOptions


SAMPLE_LEFT = "function f(x) {\n  return x;\n}"
SAMPLE_RIGHT = "function f(x, y) {\n  return x + y;\n}"


@pytest.fixture(scope="session")
def qapp():
    """A QCoreApplication for tests that need timers or queued signals."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def sample_texts():
    return SAMPLE_LEFT, SAMPLE_RIGHT


@pytest.fixture
def line_options():
    return DiffOptions(mode=DiffMode.LINES)


@pytest.fixture
def word_options():
    return DiffOptions(mode=DiffMode.WORDS)


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "config" / "settings.json"


@pytest.fixture
def write_text(tmp_path):
    """Write bytes or text to a file under tmp_path and return its path."""
    def _write(name, content):
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode("utf-8"))
        return path
    return _write
