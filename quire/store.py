"""
Node - in-memory content store addressed by dotted paths.

Stands in for the persistent store: page metadata lives under ``meta`` and
store-backed settings use ``{"value": ...}`` wrappers.
"""

from collections.abc import Mapping
from typing import Any, Dict, Optional

from .utils.arr import dotted_get, dotted_set


class Node:
    """
    Dotted-path store.

    ``get`` returns scalars as they are, nested mappings wrapped in a
    ``Node`` and ``None`` for missing paths.

    Example:
        store = Node({"meta": {"title": "Home"}})
        store.get("meta.title")      # "Home"
        store.get("meta").to_dict()  # {"title": "Home"}
    """

    __slots__ = ("_data",)

    def __init__(self, data: Optional[Any] = None):
        self._data = data if data is not None else {}

    @property
    def value(self) -> Any:
        return self._data

    def get(self, path: str) -> Any:
        if not isinstance(self._data, Mapping):
            return None

        found = dotted_get(self._data, path)
        if isinstance(found, Mapping):
            return Node(found)
        return found

    def set(self, path: str, value: Any) -> "Node":
        if not isinstance(self._data, dict):
            self._data = {}
        dotted_set(self._data, path, value)
        return self

    def text(self) -> str:
        """Text content: the scalar itself, or a ``content``/``value`` entry."""
        if isinstance(self._data, Mapping):
            for key in ("content", "value"):
                if key in self._data and self._data[key] is not None:
                    return str(self._data[key])
            return ""
        return "" if self._data is None else str(self._data)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data) if isinstance(self._data, Mapping) else {}

    def __bool__(self) -> bool:
        return bool(self._data)

    def __repr__(self) -> str:
        return f"Node({self._data!r})"
