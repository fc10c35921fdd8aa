"""
Autowiring resolver.

Inspects a call target's declared parameters and fills the ones the caller
did not supply from the instance registry, by declared type. Resolution is
best effort: anything that cannot be inspected or found is left for the call
itself to default or to fail on.
"""

import inspect
import logging
import types
import typing
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from ..faults import MissingTargetMethod
from .registry import InstanceRegistry


logger = logging.getLogger("quire.di")

# Annotations that never name a registrable object
_BUILTIN_TYPES = frozenset((
    str, int, float, bool, bytes, complex,
    list, dict, tuple, set, frozenset,
    type(None), object, type,
))

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


class ParameterSpec:
    """
    Declared parameter of a call target.

    Attributes:
        name: Parameter name
        annotation: Resolved annotation (``inspect.Parameter.empty`` if none)
        default: Declared default (``inspect.Parameter.empty`` if none)
        kind: ``inspect.Parameter`` kind
    """

    __slots__ = ("name", "annotation", "default", "kind")

    def __init__(
        self,
        name: str,
        annotation: Any = inspect.Parameter.empty,
        default: Any = inspect.Parameter.empty,
        kind: Any = inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        self.name = name
        self.annotation = annotation
        self.default = default
        self.kind = kind

    @property
    def has_default(self) -> bool:
        return self.default is not inspect.Parameter.empty

    @property
    def is_positional(self) -> bool:
        return self.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        )

    @property
    def composite_type(self) -> Optional[type]:
        """
        Class to look up in the registry, or None for builtin parameters.

        ``Optional[X]`` unwraps to ``X``; other unions, generics and
        non-class annotations count as builtin.
        """
        annotation = self.annotation
        if annotation is inspect.Parameter.empty or annotation is typing.Any:
            return None

        origin = get_origin(annotation)
        if origin is Union or origin is types.UnionType:
            members = [arg for arg in get_args(annotation) if arg is not type(None)]
            if len(members) != 1:
                return None
            annotation = members[0]
            origin = get_origin(annotation)

        if origin is not None or not isinstance(annotation, type):
            return None

        if annotation in _BUILTIN_TYPES:
            return None

        return annotation

    @property
    def is_builtin(self) -> bool:
        return self.composite_type is None

    def __repr__(self) -> str:
        return f"ParameterSpec({self.name!r}, annotation={self.annotation!r})"


class CallTarget:
    """
    Reference to an operation plus its declared parameter list.

    A target is either a callable (function, bound method, class) or a
    ``(receiver, method_name)`` pair whose method is looked up lazily.
    """

    __slots__ = ("receiver", "name", "_func", "_parameters")

    def __init__(
        self,
        func: Optional[Callable[..., Any]] = None,
        *,
        receiver: Any = None,
        name: Optional[str] = None,
    ):
        if func is None and (receiver is None or not name):
            raise TypeError("CallTarget needs a callable or a receiver and method name")

        self._func = func
        self.receiver = receiver
        self.name = name or getattr(func, "__qualname__", repr(func))
        self._parameters: Optional[List[ParameterSpec]] = None

    @classmethod
    def of(cls, target: Any) -> "CallTarget":
        """Normalize a callable, ``(receiver, name)`` pair or CallTarget."""
        if isinstance(target, CallTarget):
            return target

        if (
            isinstance(target, (tuple, list))
            and len(target) == 2
            and isinstance(target[1], str)
        ):
            return cls(receiver=target[0], name=target[1])

        if callable(target):
            return cls(target)

        raise TypeError(f"Cannot build a call target from {target!r}")

    def callable(self) -> Callable[..., Any]:
        """
        Return the bound callable.

        Raises:
            MissingTargetMethod: If the receiver has no such method
        """
        if self._func is not None:
            return self._func

        method = getattr(self.receiver, self.name, None)
        if method is None or not callable(method):
            raise MissingTargetMethod(self.receiver, self.name)

        return method

    def parameters(self) -> List[ParameterSpec]:
        """Declared parameters in order (cached)."""
        if self._parameters is None:
            self._parameters = _inspect_parameters(self.callable())
        return self._parameters

    def __repr__(self) -> str:
        if self._func is not None:
            return f"CallTarget({self.name})"
        owner = type(self.receiver).__qualname__
        return f"CallTarget({owner}.{self.name})"


def _inspect_parameters(func: Callable[..., Any]) -> List[ParameterSpec]:
    """Build parameter specs from a callable's signature and type hints."""
    sig = inspect.signature(func)

    if isinstance(func, type):
        hint_source = func.__init__
    elif inspect.isfunction(func) or inspect.ismethod(func):
        hint_source = func
    else:
        hint_source = getattr(func, "__call__", func)

    try:
        hints = get_type_hints(hint_source)
    except Exception:
        # Unresolvable forward references: fall back to raw annotations
        hints = {}

    specs = []
    for name, param in sig.parameters.items():
        if param.kind in _SKIPPED_KINDS:
            continue

        specs.append(ParameterSpec(
            name=name,
            annotation=hints.get(name, param.annotation),
            default=param.default,
            kind=param.kind,
        ))

    return specs


class Resolver:
    """
    Fills unsupplied composite-typed parameters from an InstanceRegistry.

    Supplied arguments are never overwritten and the registry is never
    modified. Inspection failures degrade to returning the supplied
    arguments unchanged.

    Example:
        resolver = Resolver(registry)
        kwargs = resolver.resolve(controller.show, {"slug": "about"})
    """

    __slots__ = ("registry",)

    def __init__(self, registry: InstanceRegistry):
        self.registry = registry

    def resolve(
        self,
        target: Any,
        supplied: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Resolve arguments for ``target``.

        Args:
            target: Callable, ``(receiver, name)`` pair or CallTarget
            supplied: Arguments already provided, by parameter name

        Returns:
            New mapping of supplied plus injected arguments
        """
        resolved = dict(supplied or {})

        try:
            call_target = CallTarget.of(target)
            parameters = call_target.parameters()
        except Exception as exc:
            logger.debug("Cannot inspect %r, skipping injection: %s", target, exc)
            return resolved

        for param in parameters:
            if param.name in resolved:
                continue

            wanted = param.composite_type
            if wanted is None:
                continue

            instance = self.registry.find_by_type(wanted)
            if instance is None:
                logger.debug(
                    "No registered instance for parameter '%s: %s' of %r",
                    param.name, wanted.__qualname__, call_target,
                )
                continue

            resolved[param.name] = instance

        return resolved
