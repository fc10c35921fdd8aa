"""
Utility helpers.
"""

from .arr import (
    dotted_get,
    dotted_set,
    filter_empty,
    flatten,
    merge_recursive,
)

__all__ = [
    "dotted_get",
    "dotted_set",
    "filter_empty",
    "flatten",
    "merge_recursive",
]
