"""
Collaborator contracts.

Protocols for the objects quire consumes but does not own: the request, the
locale, the persistent content store and the tag-emitting SEO sink. The
reference implementations in ``quire.http``, ``quire.locale``,
``quire.store`` and ``quire.seo.tags`` satisfy them; hosts may supply their
own.
"""

from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class RequestLike(Protocol):
    """Current HTTP request."""

    def path(self) -> str:
        ...

    def url(self) -> str:
        ...

    def query(self, name: str, default: Optional[str] = None) -> Optional[str]:
        ...


@runtime_checkable
class LocaleLike(Protocol):
    """Active language selector."""

    def get_language(self) -> str:
        ...


@runtime_checkable
class StoreLike(Protocol):
    """Persistent content store addressed by dotted paths."""

    def get(self, path: str) -> Any:
        ...


@runtime_checkable
class OpenGraphSink(Protocol):
    """Open-Graph property map."""

    def add_property(self, name: str, value: Any) -> Any:
        ...

    def get_properties(self) -> Dict[str, Any]:
        ...


@runtime_checkable
class TagSink(Protocol):
    """Tag-emitting SEO object."""

    def set_title(self, title: str) -> Any:
        ...

    def set_description(self, description: str) -> Any:
        ...

    def set_canonical(self, url: str) -> Any:
        ...

    def set_image(self, url: str) -> Any:
        ...

    def set_robots(self, robots: str) -> Any:
        ...

    def open_graph(self) -> OpenGraphSink:
        ...
