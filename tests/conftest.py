"""Pytest configuration and fixtures."""
import io

import pytest

from decomment.languages import get_language
from decomment.locator import CommentLocator
from decomment.pipeline.reporter import Reporter
from decomment.pipeline.ui import make_console


@pytest.fixture
def locator():
    """Fresh locator (own parsers and queries) per test."""
    return CommentLocator()


@pytest.fixture
def go():
    return get_language("go")


@pytest.fixture
def python_lang():
    return get_language("python")


@pytest.fixture
def make_tree(tmp_path):
    """
    Build a file tree under tmp_path from a {relative_path: content} dict.

    Content may be str or bytes. Returns the root path.
    """
    def _make(files):
        for rel, content in files.items():
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, str):
                content = content.encode("utf-8")
            target.write_bytes(content)
        return tmp_path

    return _make


@pytest.fixture
def capture_reporter():
    """
    Reporter printing plain text into a buffer.

    Returns a factory so tests can pick reporter flags; the buffer is
    attached as ``reporter.buffer``.
    """
    def _make(**kwargs):
        buffer = io.StringIO()
        reporter = Reporter(console=make_console(buffer, color=False), **kwargs)
        reporter.buffer = buffer
        return reporter

    return _make
