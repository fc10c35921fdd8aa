"""
SEO tag emission - meta tags and Open-Graph properties.

Reference implementation of the tag sink the metadata composer dispatches
to. Values are escaped with MarkupSafe when the head is generated.
"""

from typing import Any, Dict, List, Optional

from markupsafe import escape


class MetaTags:
    """Classic ``<head>`` tags: title, description, canonical, robots, extras."""

    def __init__(self):
        self.title: Optional[str] = None
        self.description: Optional[str] = None
        self.canonical: Optional[str] = None
        self.robots: Optional[str] = None
        self._metatags: Dict[str, tuple] = {}

    def add_meta(self, name: str, content: Any, attribute: str = "name") -> "MetaTags":
        self._metatags[name] = (attribute, content)
        return self

    def remove_meta(self, name: str) -> "MetaTags":
        self._metatags.pop(name, None)
        return self

    def get_metatags(self) -> Dict[str, tuple]:
        return dict(self._metatags)

    def generate(self, minify: bool = False) -> str:
        html = [
            f"<title>{escape(self.title or '')}</title>",
            f'<meta name="description" content="{escape(self.description or "")}">',
        ]

        for name, (attribute, content) in self._metatags.items():
            if not content:
                continue
            html.append(f'<meta {attribute}="{escape(name)}" content="{escape(content)}">')

        if self.canonical:
            html.append(f'<link rel="canonical" href="{escape(self.canonical)}"/>')

        if self.robots:
            html.append(f'<meta name="robots" content="{escape(self.robots)}">')

        return "".join(html) if minify else "\n".join(html)


class OpenGraph:
    """Open-Graph ``og:*`` property map."""

    def __init__(self):
        self._properties: Dict[str, Any] = {}
        self._images: List[str] = []

    def add_property(self, name: str, value: Any) -> "OpenGraph":
        self._properties[name] = value
        return self

    def remove_property(self, name: str) -> "OpenGraph":
        self._properties.pop(name, None)
        return self

    def get_properties(self) -> Dict[str, Any]:
        return dict(self._properties)

    def add_image(self, url: str) -> "OpenGraph":
        if url not in self._images:
            self._images.append(url)
        return self

    @property
    def images(self) -> List[str]:
        return list(self._images)

    def set_title(self, title: str) -> "OpenGraph":
        return self.add_property("title", title)

    def set_description(self, description: str) -> "OpenGraph":
        return self.add_property("description", description)

    def generate(self, minify: bool = False) -> str:
        html = []
        for name, value in self._properties.items():
            values = value if isinstance(value, (list, tuple)) else [value]
            for item in values:
                html.append(f'<meta property="og:{escape(name)}" content="{escape(item)}" />')

        for url in self._images:
            html.append(f'<meta property="og:image" content="{escape(url)}" />')

        return "".join(html) if minify else "\n".join(html)


class SEO:
    """
    Tag sink used by the page metadata composer.

    Title and description are mirrored into the Open-Graph properties.

    Example:
        seo = SEO()
        seo.set_title("About us")
        seo.open_graph().add_property("type", "article")
        head = seo.generate()
    """

    def __init__(self):
        self._metatags = MetaTags()
        self._open_graph = OpenGraph()
        self.image: Optional[str] = None

    def metatags(self) -> MetaTags:
        return self._metatags

    def open_graph(self) -> OpenGraph:
        return self._open_graph

    def set_title(self, title: str) -> "SEO":
        self._metatags.title = title
        self._open_graph.set_title(title)
        return self

    def get_title(self) -> Optional[str]:
        return self._metatags.title

    def set_description(self, description: str) -> "SEO":
        self._metatags.description = description
        self._open_graph.set_description(description)
        return self

    def set_canonical(self, url: str) -> "SEO":
        self._metatags.canonical = url
        return self

    def set_image(self, url: str) -> "SEO":
        self.image = url
        self._open_graph.add_image(url)
        return self

    def set_robots(self, robots: str) -> "SEO":
        self._metatags.robots = robots
        return self

    def generate(self, minify: bool = False) -> str:
        parts = [self._metatags.generate(minify), self._open_graph.generate(minify)]
        return "".join(parts) if minify else "\n".join(p for p in parts if p)

    def __html__(self) -> str:
        # Rendered lazily so templates see metadata composed after binding
        return self.generate()

    def __str__(self) -> str:
        return self.generate()
