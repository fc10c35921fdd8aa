"""
Controller base class.

Actions are plain methods returning the page's compiled output, normally a
``View``. Their parameters are filled from the route's positional
parameters and, for typed parameters, from registered instances.

Lifecycle hooks are explicit no-op methods that subclasses override:
- ``before``: runs before the action
- ``after``: runs after the action, for cleanup
"""

from typing import Any, Dict


class Controller:
    """
    Base controller with optional lifecycle hooks.

    Example:
        class PagesController(Controller):
            def __init__(self, view: View):
                self.view = view

            def show(self, slug: str, page: Page):
                page.meta({"title": slug.title()})
                return self.view.make("pages.show", {"slug": slug})
    """

    def before(self) -> None:
        pass

    def after(self) -> None:
        pass

    @property
    def vars(self) -> Dict[str, Any]:
        """Free-form per-request values shared between hooks and actions."""
        return self.__dict__.setdefault("_vars", {})

    def get_var(self, name: str, default: Any = False) -> Any:
        return self.vars.get(name, default)

    def set_var(self, name: str, value: Any) -> None:
        self.vars[name] = value
