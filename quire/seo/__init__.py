"""
Quire SEO - page metadata composition and tag emission.
"""

from .composer import MetadataEntry, PageMetadataComposer
from .tags import MetaTags, OpenGraph, SEO

__all__ = [
    "MetadataEntry",
    "PageMetadataComposer",
    "MetaTags",
    "OpenGraph",
    "SEO",
]
