"""Shared fixtures for mdview tests."""

import os
from typing import Callable, List

import pytest

from mdview import MarkdownBlockFlattener, MarkdownBlockRegistry, MarkdownDocumentParser, RenderBlock

from mdview_fakes import FakeHost, fake_factories


# Qt tests must not need a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def parser():
    """Fixture providing a markdown document parser."""
    return MarkdownDocumentParser()


@pytest.fixture
def flatten(parser) -> Callable[[str], List[RenderBlock]]:
    """Fixture that parses and flattens markdown text."""
    def _flatten(text: str) -> List[RenderBlock]:
        return MarkdownBlockFlattener().flatten(parser.parse(text))
    return _flatten


@pytest.fixture
def host():
    """Fixture providing a fake host container."""
    return FakeHost()


@pytest.fixture
def registry(host):
    """Fixture providing a registry backed by fake renderers."""
    return MarkdownBlockRegistry(host, fake_factories(), depth_indent=16, marker_spacing=4)


@pytest.fixture(scope="session")
def qapp():
    """Create the QApplication shared by all Qt tests."""
    from PySide6.QtWidgets import QApplication  # pylint: disable=import-outside-toplevel

    app = QApplication.instance() or QApplication([])
    yield app
