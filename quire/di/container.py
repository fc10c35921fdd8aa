"""
Generic container behind the Invoker.

Holds providers keyed by token and resolves them synchronously with
singleton caching. This is the escape hatch for container-native
operations (interface bindings, factories) the instance registry does not
cover.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Protocol, Type, TypeVar, runtime_checkable

from .errors import DIError, ProviderNotFoundError
from .resolver import CallTarget


logger = logging.getLogger("quire.di")

# Module-level cache: type -> "module.qualname" string
_type_key_cache: Dict[type, str] = {}

T = TypeVar("T")


def token_to_key(token: Any) -> str:
    """Convert a type or string token to its registry key."""
    if isinstance(token, str):
        return token

    if isinstance(token, type):
        key = _type_key_cache.get(token)
        if key is None:
            key = f"{token.__module__}.{token.__qualname__}"
            _type_key_cache[token] = key
        return key

    return str(token)


@dataclass(frozen=True)
class ProviderMeta:
    """Compact provider metadata."""
    name: str
    token: str
    module: str = ""
    qualname: str = ""


@runtime_checkable
class Provider(Protocol):
    """
    Provider protocol - how to instantiate a dependency.
    """

    @property
    def meta(self) -> ProviderMeta:
        ...

    def instantiate(self, container: "Container") -> Any:
        ...


class ValueProvider:
    """Provider that returns a pre-built value."""

    __slots__ = ("_meta", "_value")

    def __init__(self, token: Any, value: Any, name: Optional[str] = None):
        self._value = value
        self._meta = ProviderMeta(
            name=name or f"{getattr(token, '__name__', token)}_instance",
            token=token_to_key(token),
        )

    @property
    def meta(self) -> ProviderMeta:
        return self._meta

    def instantiate(self, container: "Container") -> Any:
        return self._value


class FactoryProvider:
    """
    Provider that calls a factory, resolving its annotated parameters
    from the container.
    """

    __slots__ = ("_meta", "_factory")

    def __init__(self, factory: Callable[..., Any], token: Any = None, name: Optional[str] = None):
        self._factory = factory
        module = getattr(factory, "__module__", "")
        qualname = getattr(factory, "__qualname__", repr(factory))
        self._meta = ProviderMeta(
            name=name or getattr(factory, "__name__", qualname),
            token=token_to_key(token) if token is not None else f"{module}.{qualname}",
            module=module,
            qualname=qualname,
        )

    @property
    def meta(self) -> ProviderMeta:
        return self._meta

    def instantiate(self, container: "Container") -> Any:
        return self._factory(**self._dependencies(container))

    def _dependencies(self, container: "Container") -> Dict[str, Any]:
        """Resolve annotated parameters; defaults cover the misses."""
        try:
            parameters = CallTarget(self._factory).parameters()
        except (TypeError, ValueError):
            return {}

        resolved = {}
        for param in parameters:
            wanted = param.composite_type
            if wanted is None:
                if not param.has_default:
                    raise DIError(
                        f"Cannot satisfy parameter '{param.name}' of {self._meta.qualname}: "
                        f"no type annotation to resolve"
                    )
                continue

            value = container.resolve(wanted, optional=param.has_default)
            if value is not None:
                resolved[param.name] = value

        return resolved


class ClassProvider(FactoryProvider):
    """Provider that instantiates a class, resolving its constructor."""

    __slots__ = ()

    def __init__(self, cls: type, token: Any = None):
        super().__init__(cls, token=token if token is not None else cls, name=cls.__name__)


class Container:
    """
    Synchronous DI container with singleton caching.

    Example:
        container = Container()
        container.bind(Repository, SqlRepository)
        repo = container.resolve(Repository)
    """

    __slots__ = ("_providers", "_cache")

    def __init__(self):
        self._providers: Dict[str, Provider] = {}
        self._cache: Dict[str, Any] = {}

    def register(self, provider: Provider) -> None:
        """
        Register a provider.

        Raises:
            ValueError: If a different provider already owns the token
        """
        key = provider.meta.token

        if key in self._providers:
            existing = self._providers[key]
            if existing is provider:
                return
            raise ValueError(
                f"Provider for {key} already registered: {existing.meta.name}"
            )

        self._providers[key] = provider
        logger.debug("Registered provider %s for %s", provider.meta.name, key)

    def bind(self, interface: Type, implementation: Type) -> None:
        """
        Bind an interface to an implementation class.

        Example:
            container.bind(UserRepository, SqlUserRepository)
        """
        self.register(ClassProvider(implementation, token=interface))

    def register_instance(self, token: Any, instance: Any) -> None:
        """Register a pre-instantiated object under ``token``."""
        self.register(ValueProvider(token, instance))

    def factory(self, token: Any, func: Callable[..., Any]) -> None:
        """Register a factory producing ``token``."""
        self.register(FactoryProvider(func, token=token))

    def resolve(self, token: Type[T] | str, *, optional: bool = False) -> Optional[T]:
        """
        Resolve a dependency.

        Args:
            token: Type or string key
            optional: If True, return None if not found instead of raising

        Raises:
            ProviderNotFoundError: If no provider matches and not optional
        """
        key = token_to_key(token)

        if key in self._cache:
            return self._cache[key]

        provider = self._providers.get(key)
        if provider is None:
            if optional:
                return None
            candidates = [k for k in self._providers if key.rsplit(".", 1)[-1] in k]
            raise ProviderNotFoundError(token=key, candidates=candidates)

        instance = provider.instantiate(self)
        self._cache[key] = instance
        return instance

    def is_registered(self, token: Any) -> bool:
        """Check if a provider is registered for the token."""
        return token_to_key(token) in self._providers

    def __repr__(self) -> str:
        return f"Container(providers={len(self._providers)})"
