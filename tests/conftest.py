"""
Shared test fixtures and helpers for the Quire test suite.
"""

import pytest

from quire.di import InstanceRegistry, Invoker
from quire.http import Request
from quire.locale import Locale
from quire.page import Page
from quire.seo import SEO, PageMetadataComposer
from quire.store import Node
from quire.templates import TemplateEngine
from quire.view import View


# ============================================================================
# View files
# ============================================================================


VIEW_FILES = {
    "pages/show.html": "\n  <h1>{{ title }}</h1><p>{{ slug }}</p>",
    "pages/home.html": "<html><head>{{ seo_head }}</head><body>{{ name }}</body></html>",
    "pages/empty.html": "<p>empty</p>",
}


def write_views(root, files=None):
    """Write view files below ``root`` and return its path as a string."""
    for name, source in (files or VIEW_FILES).items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source)
    return str(root)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def views_dir(tmp_path):
    return write_views(tmp_path / "views")


@pytest.fixture
def engine(views_dir):
    return TemplateEngine([views_dir])


@pytest.fixture
def locale():
    return Locale("en")


@pytest.fixture
def registry():
    return InstanceRegistry()


@pytest.fixture
def invoker(registry):
    return Invoker(registry)


@pytest.fixture
def request_():
    return Request("https://example.com/about?ref=nav")


@pytest.fixture
def store():
    return Node({"meta": {"title": "Store title", "description": "Store description"}})


@pytest.fixture
def seo():
    return SEO()


@pytest.fixture
def composer(seo, request_, store):
    return PageMetadataComposer(seo, request_, store)


@pytest.fixture
def view(engine, invoker):
    return View(engine, invoker)


@pytest.fixture
def page(locale, invoker):
    return Page(locale, invoker)
