"""
Request context - per-request object graph.

Every request gets its own registry, invoker, view, SEO sink and page, so
nothing registered while handling one request is visible to another.
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterable, Iterator, Optional

from .config import QuireConfig
from .di.invoker import Invoker
from .di.registry import InstanceRegistry
from .locale import Locale
from .page import Page
from .seo.composer import PageMetadataComposer
from .seo.tags import SEO
from .templates.engine import TemplateEngine
from .view import View


logger = logging.getLogger("quire.kernel")

_current_context: ContextVar[Optional["RequestContext"]] = ContextVar(
    "quire_request_context",
    default=None,
)


class RequestContext:
    """
    Objects owned by a single request.

    Example:
        ctx = RequestContext.create(config, Request("https://example.com/about"))
        ctx.page.init(route)
    """

    def __init__(
        self,
        config: QuireConfig,
        request: Any,
        locale: Any,
        store: Any,
        invoker: Invoker,
        view: View,
        seo: SEO,
        page: Page,
    ):
        self.config = config
        self.request = request
        self.locale = locale
        self.store = store
        self.invoker = invoker
        self.view = view
        self.seo = seo
        self.page = page

    @classmethod
    def create(
        cls,
        config: QuireConfig,
        request: Any,
        locale: Any = None,
        store: Any = None,
        services: Iterable[Any] = (),
        engine: Optional[TemplateEngine] = None,
    ) -> "RequestContext":
        """
        Build and register the request's objects.

        Args:
            config: Framework settings
            request: Incoming request (path, url, query)
            locale: Active locale (defaults to the configured language)
            store: Content store holding persisted metadata
            services: Extra instances to expose to controllers
            engine: Template engine (defaults to one over ``views_path``)
        """
        if locale is None:
            locale = Locale(config.default_language)

        if engine is None:
            engine = TemplateEngine([config.views_path], autoescape=config.autoescape)

        invoker = Invoker(InstanceRegistry())
        view = View(engine, invoker)
        seo = SEO()
        composer = PageMetadataComposer(seo, request, store)
        page = Page(locale, invoker, composer)

        for instance in (config, request, locale, engine, view, seo, composer, page):
            invoker.register(instance)

        if store is not None:
            invoker.register(store)

        for service in services:
            invoker.register(service)

        logger.debug("Created request context with %d registered objects", len(invoker.registry))

        return cls(config, request, locale, store, invoker, view, seo, page)

    @contextmanager
    def activate(self) -> Iterator["RequestContext"]:
        """Make this the current context for the duration of the block."""
        token = _current_context.set(self)
        try:
            yield self
        finally:
            _current_context.reset(token)

    @classmethod
    def current(cls) -> Optional["RequestContext"]:
        """Context of the request being handled, if any."""
        return _current_context.get()

    def __repr__(self) -> str:
        return f"RequestContext(request={self.request!r}, page={self.page!r})"
