"""
SEO (seo/)

Tests PageMetadataComposer merge, substitution and dispatch rules, and the
MetaTags / OpenGraph / SEO tag sink.
"""

import pytest
from markupsafe import Markup, escape

from quire.page import Page
from quire.seo import SEO, MetaTags, OpenGraph, PageMetadataComposer
from quire.store import Node
from quire.view import View


def compose(composer, page, view=None, **kwargs):
    return composer.compose(page, view if view is not None else View(), **kwargs)


# ============================================================================
# Merge
# ============================================================================

class TestMerge:

    def test_page_overrides_store(self, seo, page):
        composer = PageMetadataComposer(seo, store=Node({"meta": {"title": "Store"}}))
        page.meta({"title": "Page"})
        compose(composer, page)
        assert seo.get_title() == "Page"

    def test_store_fills_gaps(self, composer, seo, page):
        page.meta({"title": "Page"})
        compose(composer, page)
        assert seo.get_title() == "Page"
        assert seo.metatags().description == "Store description"

    def test_explicit_store_meta(self, seo, page):
        composer = PageMetadataComposer(seo)
        compose(composer, page, store_meta={"title": "Given"})
        assert seo.get_title() == "Given"

    def test_without_store_or_request(self, seo, page):
        entries = compose(PageMetadataComposer(seo), page)
        assert entries == []
        assert seo.open_graph().get_properties() == {"type": "website"}


# ============================================================================
# Placeholders
# ============================================================================

class TestPlaceholders:

    def test_substitution(self, composer, seo, page):
        page.meta({"title": "Welcome {{name}}"})
        compose(composer, page, View().bind("name", "Acme"))
        assert seo.get_title() == "Welcome Acme"
        assert page.meta_values["title"] == "Welcome Acme"

    def test_nested_keys(self, composer, seo, page):
        page.meta({"title": "{{site.name}} shop"})
        compose(composer, page, View().bind("site", {"name": "Acme"}))
        assert seo.get_title() == "Acme shop"

    def test_unknown_tokens_kept(self, composer, seo, page):
        page.meta({"title": "Hi {{nope}} {{name}}"})
        compose(composer, page, View().bind("name", "Acme"))
        assert seo.get_title() == "Hi {{nope}} Acme"

    def test_empty_snapshot_leaves_value(self, composer, seo, page):
        page.meta({"title": "Welcome {{name}}"})
        compose(composer, page, View().bind("count", 3))
        assert seo.get_title() == "Welcome {{name}}"


# ============================================================================
# Fallbacks
# ============================================================================

class TestFallback:

    def test_null_value_read_from_store(self, seo, page):
        store = Node({"meta": {"title": {"content": "From store"}}})
        composer = PageMetadataComposer(seo, store=store)
        compose(composer, page, store_meta={"title": None})
        assert seo.get_title() == "From store"
        assert page.meta_values["title"] == "From store"

    def test_null_value_without_store_entry(self, seo, page):
        composer = PageMetadataComposer(seo, store=Node())
        compose(composer, page, store_meta={"description": None})
        assert seo.metatags().description == ""


# ============================================================================
# Dispatch
# ============================================================================

class TestDispatch:

    def test_og_image_goes_to_image_sink(self, composer, seo, page):
        page.meta({"og:image": "https://example.com/a.png"})
        entries = compose(composer, page)
        assert seo.image == "https://example.com/a.png"
        assert seo.open_graph().images == ["https://example.com/a.png"]
        assert "image" not in seo.open_graph().get_properties()
        assert [e.sink for e in entries if e.key == "og:image"] == ["image"]

    def test_og_property(self, composer, seo, page):
        page.meta({"og:site_name": "Acme"})
        compose(composer, page)
        assert seo.open_graph().get_properties()["site_name"] == "Acme"

    def test_default_type_website(self, composer, seo, page):
        compose(composer, page)
        assert seo.open_graph().get_properties()["type"] == "website"

    def test_declared_type_kept(self, composer, seo, page):
        page.meta({"og:type": "article"})
        compose(composer, page)
        assert seo.open_graph().get_properties()["type"] == "article"

    def test_robots_joined_and_removed(self, composer, seo, page):
        page.meta({"robots": ["noindex", "nofollow"]})
        entries = compose(composer, page)
        assert seo.metatags().robots == "noindex, nofollow"
        assert "robots" not in [e.key for e in entries]

    def test_canonical_defaults_to_request_url(self, composer, seo, page):
        compose(composer, page)
        assert seo.metatags().canonical == "https://example.com/about"
        assert seo.open_graph().get_properties()["url"] == "https://example.com/about"

    def test_explicit_canonical(self, composer, seo, page):
        page.meta({"canonical_url": "https://example.com/other"})
        compose(composer, page)
        assert seo.metatags().canonical == "https://example.com/other"

    def test_title_and_description_mirrored_into_og(self, composer, seo, page):
        page.meta({"title": "About"})
        compose(composer, page)
        properties = seo.open_graph().get_properties()
        assert properties["title"] == "About"
        assert properties["description"] == "Store description"

    def test_unhandled_key(self, composer, seo, page):
        page.meta({"keywords": "a, b"})
        entries = compose(composer, page)
        assert [e.sink for e in entries if e.key == "keywords"] == ["unhandled"]
        assert "keywords" not in seo.generate()

    def test_entry_sinks(self, composer, page):
        page.meta({"title": "About", "og:locale": "en_US"})
        sinks = {e.key: e.sink for e in compose(composer, page)}
        assert sinks == {
            "title": "title",
            "description": "description",
            "og:locale": "og",
            "canonical_url": "canonical",
        }


# ============================================================================
# Tag sink
# ============================================================================

class TestTags:

    def test_meta_tags_escaped(self):
        tags = MetaTags()
        tags.title = "A & B"
        tags.description = 'Say "hi"'
        html = tags.generate()
        assert "<title>A &amp; B</title>" in html
        assert 'content="Say &#34;hi&#34;"' in html

    def test_extra_meta(self):
        tags = MetaTags().add_meta("author", "Ann").add_meta("og:x", "y", attribute="property")
        tags.remove_meta("og:x")
        assert tags.get_metatags() == {"author": ("name", "Ann")}
        assert '<meta name="author" content="Ann">' in tags.generate()

    def test_open_graph(self):
        og = OpenGraph().add_property("type", "article").add_property("tag", ["a", "b"])
        og.add_image("https://example.com/a.png").add_image("https://example.com/a.png")
        html = og.generate()
        assert '<meta property="og:type" content="article" />' in html
        assert html.count('property="og:tag"') == 2
        assert og.images == ["https://example.com/a.png"]

    def test_seo_generate(self):
        seo = SEO().set_title("About").set_canonical("https://example.com/about").set_robots("noindex")
        html = seo.generate()
        assert "<title>About</title>" in html
        assert '<link rel="canonical" href="https://example.com/about"/>' in html
        assert '<meta name="robots" content="noindex">' in html
        assert '<meta property="og:title" content="About" />' in html

    def test_minify(self):
        seo = SEO().set_title("About")
        assert "\n" not in seo.generate(minify=True)

    def test_html_protocol(self):
        seo = SEO().set_title("A & B")
        assert escape(seo) == Markup(seo.generate())
        assert str(seo) == seo.generate()
