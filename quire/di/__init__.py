"""
Quire dependency injection.

Minimal autowiring for page controllers:
- InstanceRegistry: objects registered by the application, looked up by type
- Resolver: fills unsupplied composite-typed parameters from the registry
- Invoker: calls targets with resolved arguments, delegates the rest to a Container
- Container: synchronous provider container (bindings, factories)
"""

from .registry import InstanceRegistry

from .resolver import (
    ParameterSpec,
    CallTarget,
    Resolver,
)

from .container import (
    Container,
    Provider,
    ProviderMeta,
    ValueProvider,
    FactoryProvider,
    ClassProvider,
)

from .invoker import Invoker

from .errors import (
    DIError,
    ProviderNotFoundError,
)

__all__ = [
    "InstanceRegistry",
    "ParameterSpec",
    "CallTarget",
    "Resolver",
    "Container",
    "Provider",
    "ProviderMeta",
    "ValueProvider",
    "FactoryProvider",
    "ClassProvider",
    "Invoker",
    "DIError",
    "ProviderNotFoundError",
]
