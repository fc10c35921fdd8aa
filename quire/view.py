"""
View - data snapshot bound to a render pass.

Controllers bind values to a View and return it; the page renders it through
the template engine after composing metadata from the same snapshot.
"""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Dict, Iterator, Optional

from .faults import ViewNotFound
from .utils.arr import flatten

if TYPE_CHECKING:
    from .di.invoker import Invoker
    from .templates.engine import TemplateEngine


logger = logging.getLogger("quire.view")

_TEMPLATE_SUFFIXES = (".html", ".htm", ".xml", ".txt", ".j2", ".jinja")


class View(Mapping):
    """
    Mapping of variable name to value, filled through ``bind``.

    Bind rules:
    - a mapping argument merges its keys into the top level
    - a list/tuple/mapping value is additive: an existing scalar under the
      key is promoted to a list first, lists extend, mappings only add keys
    - anything else sets or overwrites the key

    Example:
        view = View(engine)
        view.bind("title", "Welcome").bind({"user": user})
        return view.make("pages.home")
    """

    def __init__(
        self,
        engine: Optional["TemplateEngine"] = None,
        invoker: Optional["Invoker"] = None,
    ):
        self._data: Dict[str, Any] = {}
        self._engine = engine
        self._invoker = invoker
        self.view_file: Optional[str] = None

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------

    def bind(self, key: Any, value: Any = None) -> "View":
        """Bind a value (or a mapping of values) to the view."""
        if isinstance(key, Mapping):
            self._data.update(key)
        elif isinstance(value, (list, tuple, Mapping)):
            self._data[key] = _combine(self._data.get(key), value, key in self._data)
        else:
            self._data[key] = value

        return self

    with_ = bind

    def make(self, view: str, data: Optional[Mapping[str, Any]] = None) -> "View":
        """
        Select the view file and bind ``data``.

        ``pages.home`` resolves to ``pages/home.html``.

        Raises:
            ViewNotFound: If the template engine cannot load the file
        """
        template_name = self.template_name(view)

        if self._engine is not None and not self._engine.exists(template_name):
            raise ViewNotFound(view, template_name)

        self.view_file = template_name

        for key, value in (data or {}).items():
            self.bind(key, value)

        return self

    @staticmethod
    def template_name(view: str) -> str:
        if view.endswith(_TEMPLATE_SUFFIXES):
            return view
        return view.replace(".", "/") + ".html"

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, view: Optional[str] = None, data: Optional[Mapping[str, Any]] = None) -> str:
        """
        Render the selected view file.

        Values in ``data`` take precedence over bound values.
        """
        if view:
            self.make(view, data)

        if self.view_file is None or self._engine is None:
            raise ViewNotFound(view or "<unset>", self.view_file or "<no template engine>")

        context = dict(self._data)
        if data:
            context.update(data)

        return self._engine.render(self.view_file, context).lstrip()

    def __str__(self) -> str:
        return self.render()

    # ------------------------------------------------------------------
    # Snapshot access
    # ------------------------------------------------------------------

    @property
    def data(self) -> Dict[str, Any]:
        return self._data

    def snapshot(self) -> Dict[str, Any]:
        """Shallow copy of the bound data."""
        return dict(self._data)

    def get(self, key: Any, default: Any = None) -> Any:
        """Bound value, falling back to the invoker's registered objects."""
        if key in self._data:
            return self._data[key]

        if self._invoker is not None:
            found = self._invoker.get(key)
            if found is not None:
                return found

        return default

    def substitutions(self) -> Dict[str, Any]:
        """Placeholder table built from the snapshot."""
        return placeholder_table(self._data)

    def __getitem__(self, key: Any) -> Any:
        return self._data[key]

    def __setitem__(self, key: Any, value: Any) -> None:
        self.bind(key, value)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._data))

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        # A view with no bound data is still a valid controller result
        return True

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(f"View has no bound value '{name}'") from None

    def __repr__(self) -> str:
        return f"View(view_file={self.view_file!r}, keys={list(self._data)!r})"


def placeholder_table(data: Mapping) -> Dict[str, Any]:
    """
    Map ``{{key}}`` tokens to snapshot values.

    Only non-empty strings and mappings with at least one string key take
    part; nested values are flattened to dotted keys.

    Example:
        placeholder_table({"site": {"name": "Acme"}}) == {"{{site.name}}": "Acme"}
    """
    candidates = {
        key: value
        for key, value in data.items()
        if value and (
            isinstance(value, str)
            or (isinstance(value, Mapping) and any(isinstance(k, str) for k in value))
        )
    }

    return {"{{" + str(key) + "}}": value for key, value in flatten(candidates).items()}


def _combine(existing: Any, value: Any, present: bool) -> Any:
    """Additively combine a collection value with what is already bound."""
    if not present:
        return dict(value) if isinstance(value, Mapping) else list(value)

    if not isinstance(existing, (list, Mapping)):
        existing = [existing]

    if isinstance(existing, list) and not isinstance(value, Mapping):
        return existing + list(value)

    combined = dict(existing) if isinstance(existing, Mapping) else dict(enumerate(existing))
    additions = value.items() if isinstance(value, Mapping) else enumerate(value)
    for key, item in additions:
        combined.setdefault(key, item)
    return combined
