"""Shared fixtures for listnest tests.

Every test runs against an isolated user config directory and a fresh
ConfigManager, so no test reads or writes the real ``~/.listnest``.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from lxml import etree as ET

from listnest.config import ConfigManager
from listnest.core.document import build_list, find_list_item_by_text, outline
from listnest.core.editor import Editor
from listnest.core.models import DocumentContext
from listnest.core.services.list_editing_service import ListEditingService

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the user config dir at a temp folder and reset the singleton."""
    config_dir = tmp_path / "listnest-config"
    monkeypatch.setenv("LISTNEST_CONFIG_DIR", str(config_dir))
    ConfigManager.reset()
    yield config_dir
    ConfigManager.reset()


@pytest.fixture
def make_document():
    """Build a DocumentContext whose root holds one list built from ``layout``.

    Returns ``(context, list_element)``.
    """
    def factory(layout, tag="ul"):
        ctx = DocumentContext()
        top = build_list(ctx, layout, tag)
        ctx.root.append(top)
        return ctx, top
    return factory


@pytest.fixture
def item():
    """Look up a list item by its text."""
    def finder(ctx: DocumentContext, text: str) -> ET._Element:
        found = find_list_item_by_text(ctx, text)
        assert found is not None, f"no list item reads {text!r}"
        return found
    return finder


@pytest.fixture
def shape():
    """Outline of the first top-level list in a context."""
    def describe(ctx: DocumentContext):
        return outline(ctx.root[0])
    return describe


@pytest.fixture
def service():
    return ListEditingService({"default_list_tag": "ul", "strict_invariants": False})


@pytest.fixture
def strict_service():
    return ListEditingService({"default_list_tag": "ul", "strict_invariants": True})


@pytest.fixture
def editor_for(make_document):
    def factory(layout, tag="ul"):
        ctx, _top = make_document(layout, tag)
        return Editor(ctx)
    return factory
