"""
Template Engine - Jinja2 rendering for view files.

The engine executes view files; quire itself only consumes the data
snapshot bound to a view.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound, select_autoescape


logger = logging.getLogger("quire.view")


class TemplateEngine:
    """
    Jinja2 template engine over one or more view directories.

    Args:
        search_paths: View directories, searched in order
        autoescape: Enable HTML autoescaping for html/htm/xml files
        globals: Custom global variables/functions
        filters: Custom filters

    Example:
        engine = TemplateEngine(["views"])
        html = engine.render("pages/home.html", {"title": "Home"})
    """

    def __init__(
        self,
        search_paths: Optional[List[str]] = None,
        *,
        autoescape: bool = True,
        globals: Optional[Dict[str, Any]] = None,
        filters: Optional[Dict[str, Callable]] = None,
    ):
        self.search_paths = [Path(p) for p in (search_paths or [])]

        self.env = Environment(
            loader=FileSystemLoader([str(p) for p in self.search_paths]),
            autoescape=select_autoescape(
                enabled_extensions=["html", "htm", "xml"],
                default_for_string=True,
            ) if autoescape else False,
        )

        if filters:
            self.env.filters.update(filters)

        if globals:
            self.env.globals.update(globals)

    def get_template(self, template_name: str) -> Template:
        """
        Load a template.

        Raises:
            TemplateNotFound: If the template doesn't exist
        """
        return self.env.get_template(template_name)

    def exists(self, template_name: str) -> bool:
        """Check whether a template can be loaded."""
        try:
            self.get_template(template_name)
        except TemplateNotFound:
            return False
        return True

    def render(self, template_name: str, context: Optional[Mapping[str, Any]] = None) -> str:
        """
        Render a template file.

        Args:
            template_name: Template path relative to a search path
            context: Template variables

        Returns:
            Rendered string
        """
        template = self.get_template(template_name)
        logger.debug("Rendering %s", template_name)
        return template.render(**dict(context or {}))

    def render_string(self, source: str, context: Optional[Mapping[str, Any]] = None) -> str:
        """Render a template given as a string."""
        return self.env.from_string(source).render(**dict(context or {}))

    def __repr__(self) -> str:
        paths = ", ".join(str(p) for p in self.search_paths)
        return f"TemplateEngine([{paths}])"
