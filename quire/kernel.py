"""
Kernel - drives one request from matched route to HTML.

Routing belongs to the host: the kernel receives an already matched route
(controller, action, parameters, settings) and the request.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from .config import QuireConfig
from .context import RequestContext
from .faults import Fault, Severity
from .templates.engine import TemplateEngine
from .view import View


logger = logging.getLogger("quire.kernel")

EVENTS = ("compiled", "rendered")

_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARN: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.FATAL: logging.CRITICAL,
}


class Kernel:
    """
    Page kernel.

    Events:
    - ``compiled``: after the controller action returned, with the context
    - ``rendered``: after rendering, with the context and the HTML

    Example:
        kernel = Kernel(QuireConfig(views_path="views"))
        kernel.on("rendered", lambda data: cache.put(data["context"].request.url(), data["html"]))
        html = kernel.handle({"controller": PagesController, "action": "show",
                              "parameters": ["about"]}, Request(url))
    """

    def __init__(self, config: Optional[QuireConfig] = None, engine: Optional[TemplateEngine] = None):
        self.config = config or QuireConfig()
        self.engine = engine or TemplateEngine(
            [self.config.views_path],
            autoescape=self.config.autoescape,
        )
        self._listeners: Dict[str, List[Callable[[Dict[str, Any]], None]]] = {
            event: [] for event in EVENTS
        }

    def on(self, event: str, callback: Callable[[Dict[str, Any]], None]) -> "Kernel":
        """
        Register an event listener.

        Raises:
            ValueError: For an unknown event name
        """
        if event not in self._listeners:
            raise ValueError(f"Unknown kernel event '{event}', expected one of {EVENTS}")

        self._listeners[event].append(callback)
        return self

    def trigger(self, event: str, data: Dict[str, Any]) -> None:
        """Call the listeners of ``event`` in registration order."""
        for callback in self._listeners.get(event, []):
            callback(data)

    def context(
        self,
        request: Any,
        locale: Any = None,
        store: Any = None,
        services: Iterable[Any] = (),
    ) -> RequestContext:
        """Fresh per-request context sharing the kernel's template engine."""
        return RequestContext.create(
            self.config,
            request,
            locale=locale,
            store=store,
            services=services,
            engine=self.engine,
        )

    def handle(
        self,
        route: Mapping[str, Any],
        request: Any,
        locale: Any = None,
        store: Any = None,
        services: Iterable[Any] = (),
    ) -> str:
        """
        Compile and render the page for ``route``.

        Raises:
            Fault: Structural failures, logged before they propagate
        """
        ctx = self.context(request, locale=locale, store=store, services=services)

        with ctx.activate():
            try:
                page = ctx.page.init(route)
                compilation = page.compile()
                self.trigger("compiled", {"context": ctx, "compilation": compilation})

                if isinstance(compilation, View) and "seo_head" not in compilation:
                    compilation.bind("seo_head", ctx.seo)

                html = page.to_html()
            except Fault as fault:
                logger.log(
                    _LOG_LEVELS.get(fault.severity, logging.ERROR),
                    f"[{fault.domain.value.upper()}] {fault.code}: {fault.message}",
                    extra={"fault": fault.to_dict()},
                )
                raise

        self.trigger("rendered", {"context": ctx, "html": html})
        return html

    def __repr__(self) -> str:
        return f"Kernel(engine={self.engine!r})"
