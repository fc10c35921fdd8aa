"""
Quire templates - Jinja2 execution of view files.
"""

from .engine import TemplateEngine

__all__ = ["TemplateEngine"]
