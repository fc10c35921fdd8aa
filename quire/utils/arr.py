"""
Nested mapping helpers shared by the page and metadata pipeline.
"""

from typing import Any, Dict, Mapping, Optional


def is_empty(value: Any) -> bool:
    """Falsy test used for filtering: None, "", 0, False, empty containers."""
    return not value


def filter_empty(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop top-level entries whose value is empty."""
    return {key: value for key, value in data.items() if not is_empty(value)}


def merge_recursive(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge ``overlay`` onto a copy of ``base``.

    Nested mappings merge key by key; any other overlay value replaces the
    base value. Key order follows ``base`` first, then new overlay keys.
    """
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_recursive(current, value)
        else:
            merged[key] = value
    return merged


def flatten(data: Mapping[Any, Any], prefix: str = "") -> Dict[str, Any]:
    """
    Flatten nested mappings and lists into dotted keys.

    Example:
        flatten({"a": {"b": 1}, "c": [2]}) == {"a.b": 1, "c.0": 2}
    """
    results: Dict[str, Any] = {}

    for key, value in _items(data):
        dotted = f"{prefix}{key}"
        if isinstance(value, (Mapping, list, tuple)) and value:
            results.update(flatten(value, f"{dotted}."))
        else:
            results[dotted] = value

    return results


def dotted_get(data: Mapping[str, Any], path: str, default: Optional[Any] = None) -> Any:
    """Get a value by dot-separated path."""
    current: Any = data
    for part in path.split("."):
        if isinstance(current, Mapping) and part in current:
            current = current[part]
        else:
            return default
    return current


def dotted_set(data: Dict[str, Any], path: str, value: Any) -> None:
    """Set a value by dot-separated path, creating intermediate mappings."""
    parts = path.split(".")
    current = data
    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]
    current[parts[-1]] = value


def _items(data: Any):
    if isinstance(data, Mapping):
        return data.items()
    return enumerate(data)
