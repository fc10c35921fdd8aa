"""
Page metadata composition.

Merges store-backed metadata with the page's own metadata, substitutes
``{{placeholders}}`` from the rendered view's data and dispatches every
entry to the SEO tag sink.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..utils.arr import filter_empty, merge_recursive
from ..view import placeholder_table

if TYPE_CHECKING:
    from ..contracts import RequestLike, StoreLike, TagSink
    from ..page import Page


logger = logging.getLogger("quire.seo")

_PLACEHOLDER = re.compile(r"\{\{[^{}]*\}\}")


@dataclass(frozen=True)
class MetadataEntry:
    """
    A resolved metadata pair and the sink it was dispatched to.

    ``sink`` is one of: title, description, canonical, image, og, unhandled.
    """
    key: str
    value: Any
    sink: str


class PageMetadataComposer:
    """
    Composes a page's metadata and hands it to the tag sink.

    Sources, later overriding earlier: store metadata, then the page's
    non-empty metadata (nested structures merge key by key). The request
    supplies the canonical URL when none is set.

    Example:
        composer = PageMetadataComposer(seo, request, store)
        composer.compose(page, view)
    """

    def __init__(
        self,
        seo: "TagSink",
        request: Optional["RequestLike"] = None,
        store: Optional["StoreLike"] = None,
    ):
        self.seo = seo
        self.request = request
        self.store = store

    def compose(
        self,
        page: "Page",
        view: Mapping,
        store_meta: Optional[Mapping[str, Any]] = None,
    ) -> List[MetadataEntry]:
        """
        Compose and dispatch metadata.

        Args:
            page: Page whose metadata is layered over the store's
            view: Data snapshot of the render pass
            store_meta: Persisted metadata (defaults to the store's ``meta``)

        Returns:
            Dispatched entries in merge order
        """
        if store_meta is None:
            store_meta = self._store_meta()

        meta = merge_recursive(store_meta, filter_empty(page.meta_values))

        if meta.get("canonical_url") is None and self.request is not None:
            meta["canonical_url"] = self.request.url()

        if "robots" in meta:
            robots = meta.pop("robots")
            if isinstance(robots, (list, tuple)):
                robots = ", ".join(str(r) for r in robots)
            self.seo.set_robots(robots)

        table = placeholder_table(view)

        for key, value in list(meta.items()):
            if table and isinstance(value, str) and "{{" in value:
                value = self._substitute(value, table)
            elif value is None:
                value = self._fallback(key)

            meta[key] = value
            page.meta_values[key] = value

        entries = [self._dispatch(key, value) for key, value in meta.items()]

        open_graph = self.seo.open_graph()
        if "type" not in open_graph.get_properties():
            open_graph.add_property("type", "website")

        return entries

    def _store_meta(self) -> Dict[str, Any]:
        if self.store is None:
            return {}

        found = self.store.get("meta")
        if isinstance(found, Mapping):
            return dict(found)
        if hasattr(found, "to_dict"):
            return found.to_dict()
        return {}

    def _fallback(self, key: str) -> str:
        """Text of ``meta.<key>`` in the store, or an empty string."""
        if self.store is None:
            return ""

        found = self.store.get(f"meta.{key}")
        if found is None or found is False:
            return ""
        if hasattr(found, "text"):
            return found.text()
        return str(found)

    @staticmethod
    def _substitute(value: str, table: Dict[str, Any]) -> str:
        """Replace known ``{{tokens}}``; unknown tokens stay verbatim."""
        def replace(match: "re.Match[str]") -> str:
            token = match.group(0)
            if token in table:
                return str(table[token])
            return token

        return _PLACEHOLDER.sub(replace, value)

    def _dispatch(self, key: str, value: Any) -> MetadataEntry:
        seo = self.seo

        if key == "title":
            seo.set_title(value)
            sink = "title"
        elif key == "description":
            seo.set_description(value)
            sink = "description"
        elif key == "canonical_url":
            seo.set_canonical(value)
            seo.open_graph().add_property("url", value)
            sink = "canonical"
        elif key == "og:image":
            seo.set_image(value)
            sink = "image"
        elif key.startswith("og:"):
            seo.open_graph().add_property(key[3:], value)
            sink = "og"
        else:
            logger.debug("Unhandled metadata key '%s'", key)
            sink = "unhandled"

        return MetadataEntry(key=key, value=value, sink=sink)
