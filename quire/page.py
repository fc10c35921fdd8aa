"""
Page - one rendered request.

A page is initialized from a matched route, compiles by calling the route's
controller action through the invoker and renders the action's result. When
the result is a ``View`` the page's metadata is composed before the view is
turned into a string.
"""

import importlib
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from .di.invoker import Invoker
from .faults import PageNotInitialized, UncompiledRender, VoidControllerResult
from .seo.composer import PageMetadataComposer
from .utils.arr import filter_empty, merge_recursive
from .view import View

if TYPE_CHECKING:
    from .contracts import LocaleLike


logger = logging.getLogger("quire.page")

_UNSET: Any = object()


class Page:
    """
    Page lifecycle, settings and metadata.

    Settings and metadata are locale-scoped: values are kept under the
    active language returned by the locale.

    Example:
        page = Page(locale, invoker)
        page.init({"controller": PagesController, "action": "show", "parameters": ["about"]})
        page.compile()
        html = str(page)
    """

    def __init__(
        self,
        locale: "LocaleLike",
        invoker: Optional[Invoker] = None,
        composer: Optional[PageMetadataComposer] = None,
    ):
        self.locale = locale
        self.invoker = invoker if invoker is not None else Invoker()
        self.composer = composer
        self.controller: Any = None
        self.action: Optional[str] = None
        self.parameters: List[Any] = []
        self._route: Optional[Dict[str, Any]] = None
        self._instance: Any = None
        self._settings: Dict[str, Any] = {}
        self._meta: Dict[str, Any] = {"title": None, "description": None}
        self._compilation: Any = _UNSET

    # ------------------------------------------------------------------
    # Route
    # ------------------------------------------------------------------

    def init(self, route: Mapping[str, Any]) -> "Page":
        """
        Setup from a matched route.

        The route names ``controller`` and ``action`` and may carry
        ``parameters`` (positional) and default ``settings``. Initializing
        again replaces the previous route, its parameters, the controller
        instance and any compilation; settings and metadata are kept.
        """
        if not route.get("controller") or not route.get("action"):
            raise ValueError("Route must name a controller and an action")

        self.controller = route["controller"]
        self.action = route["action"]
        self.parameters = []
        self._route = dict(route)
        self._instance = None
        self._compilation = _UNSET

        if not self._route.get("alias"):
            self._route.pop("alias", None)

        if route.get("parameters"):
            self.set_parameters(route["parameters"])

        if route.get("settings"):
            self.settings(route["settings"])

        return self

    def set_parameters(self, params: Iterable[Any] | Mapping[str, Any]) -> "Page":
        """Append positional parameters (mapping values keep their order)."""
        values = params.values() if isinstance(params, Mapping) else params
        self.parameters.extend(values)
        return self

    def get(self, key: str, default: Any = None) -> Any:
        """Route attribute."""
        return (self._route or {}).get(key, default)

    def __getitem__(self, key: str) -> Any:
        return (self._route or {})[key]

    def __contains__(self, key: str) -> bool:
        return key in (self._route or {})

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._route or {})

    # ------------------------------------------------------------------
    # Metadata & settings
    # ------------------------------------------------------------------

    @property
    def meta_values(self) -> Dict[str, Any]:
        """Page-declared metadata (rewritten in place by composition)."""
        return self._meta

    def meta(self, values: Mapping[str, Any]) -> "Page":
        """
        Merge metadata declared by the controller.

        A mapping keyed by the active language contributes only that
        language's entries. Empty values are ignored.
        """
        partition = values.get(self.locale.get_language(), values)
        if not isinstance(partition, Mapping):
            partition = values

        filtered = filter_empty(partition)
        if filtered:
            self._meta = merge_recursive(self._meta, filtered)

        return self

    def settings(self, values: Mapping[str, Any]) -> "Page":
        """
        Merge settings under the active language.

        Values already present take precedence over the new ones.
        """
        language = self.locale.get_language()
        if language not in values:
            values = {language: dict(values)}

        if self._settings:
            self._settings = merge_recursive(values, self._settings)
        else:
            self._settings = merge_recursive({}, values)

        return self

    def setting(self, key: str, value: Any = _UNSET) -> Any:
        """
        Write or read a single setting of the active language.

        Write (non-empty ``value``): a store-backed ``{"value": ...}``
        wrapper keeps its shape and only its inner value changes.

        Read: the wrapper's value, else the raw setting, else ``False``.
        A miss is remembered by storing ``False`` under the key.
        """
        language = self.locale.get_language()

        if value is not _UNSET and value:
            partition = self._settings.setdefault(language, {})
            existing = partition.get(key)
            if isinstance(existing, dict) and existing.get("value") is not None:
                existing["value"] = value
            else:
                partition[key] = value
            return True

        existing = (self._settings.get(language) or {}).get(key)
        if isinstance(existing, Mapping) and existing.get("value") is not None:
            found = existing["value"]
        else:
            found = existing

        if not found:
            self._settings.setdefault(language, {})[key] = False
            return False if found is None else found

        return found

    def get_settings(self) -> Dict[str, Any]:
        """Active language's settings, or every language when it has none."""
        partition = self._settings.get(self.locale.get_language())
        return partition if partition is not None else self._settings

    # ------------------------------------------------------------------
    # Compilation & rendering
    # ------------------------------------------------------------------

    def compile(self) -> Any:
        """
        Call the controller action with the page's positional parameters.

        Every call re-invokes the action.

        Raises:
            PageNotInitialized: If ``init()`` was never called
            MissingTargetMethod: If the controller lacks the action
            VoidControllerResult: If the action returns nothing usable
        """
        if self._route is None:
            raise PageNotInitialized()

        controller = self._controller_instance()
        logger.debug("Compiling %s.%s", type(controller).__qualname__, self.action)

        self.invoker.call_hook(controller, "before")
        compilation = self.invoker.call((controller, self.action), list(self.parameters))

        if not compilation:
            self._compilation = _UNSET
            raise VoidControllerResult(type(controller).__qualname__, self.action)

        self._compilation = compilation
        self.invoker.call_hook(controller, "after")

        return compilation

    @property
    def compiled(self) -> bool:
        return self._compilation is not _UNSET

    @property
    def controller_instance(self) -> Any:
        """Controller the current route compiled against (None until compile)."""
        return self._instance

    @property
    def compilation(self) -> Any:
        """
        The action's return value.

        Raises:
            UncompiledRender: If the page has not compiled
        """
        if self._compilation is _UNSET:
            raise UncompiledRender()
        return self._compilation

    def render(self) -> Any:
        """Raw compilation (HTML source or a View)."""
        return self.compilation

    def init_meta(self, view: View, composer: Optional[PageMetadataComposer] = None) -> "Page":
        """Compose metadata for ``view`` with the given or registered composer."""
        composer = composer or self.composer
        if composer is None:
            logger.debug("No metadata composer registered, skipping metadata")
            return self

        composer.compose(self, view)
        return self

    def to_html(self) -> str:
        """
        Final string output.

        Raises:
            UncompiledRender: If the page has not compiled
        """
        compilation = self.compilation

        if isinstance(compilation, View):
            self.invoker.call(self.init_meta, {"view": compilation})

        return str(compilation)

    def __str__(self) -> str:
        return self.to_html()

    def _controller_instance(self) -> Any:
        """Instantiate the route's controller once, autowiring its constructor."""
        if self._instance is not None:
            return self._instance

        controller = self.controller
        if isinstance(controller, str):
            controller = _import_controller(controller)

        if isinstance(controller, type):
            controller = self.invoker.call(controller)

        self._instance = controller
        return controller

    def __repr__(self) -> str:
        return f"Page(controller={self.controller!r}, action={self.action!r})"


def _import_controller(reference: str) -> type:
    """Import a ``module.path:ClassName`` controller reference."""
    if ":" not in reference:
        raise ValueError(f"Controller reference '{reference}' must look like 'module.path:ClassName'")

    module_path, class_name = reference.rsplit(":", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
