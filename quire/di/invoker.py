"""
Invoker - uniform call surface over the registry, resolver and container.
"""

import inspect
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .container import Container
from .registry import InstanceRegistry
from .resolver import CallTarget, Resolver


logger = logging.getLogger("quire.di")


class Invoker:
    """
    Calls targets with autowired arguments.

    ``register``/``has`` track instances in the InstanceRegistry (and mirror
    them into the container so container-built objects can depend on them).
    ``call`` resolves arguments and invokes the target. Every other attribute
    is delegated to the underlying Container.

    Example:
        invoker = Invoker()
        invoker.register(request)
        html = invoker.call((controller, "index"), ["about"])
    """

    __slots__ = ("_registry", "_resolver", "_container")

    def __init__(
        self,
        registry: Optional[InstanceRegistry] = None,
        container: Optional[Container] = None,
    ):
        self._registry = registry if registry is not None else InstanceRegistry()
        self._resolver = Resolver(self._registry)
        self._container = container if container is not None else Container()

    @property
    def registry(self) -> InstanceRegistry:
        return self._registry

    @property
    def resolver(self) -> Resolver:
        return self._resolver

    @property
    def container(self) -> Container:
        return self._container

    def register(self, instance: Any) -> Any:
        """Register an instance for type-based injection."""
        self._registry.register(instance)

        token = type(instance)
        if not self._container.is_registered(token):
            self._container.register_instance(token, instance)

        return instance

    def has(self, identity: Any) -> bool:
        """Check whether ``identity`` has been registered."""
        return self._registry.contains(identity)

    def get(self, token: Any) -> Any:
        """Look ``token`` up in the registry, then in the container."""
        if isinstance(token, type):
            found = self._registry.find_by_type(token)
            if found is not None:
                return found

        return self._container.resolve(token, optional=True)

    def call(
        self,
        target: Any,
        supplied: Optional[Mapping[str, Any] | Sequence[Any]] = None,
    ) -> Any:
        """
        Call ``target`` with resolved arguments.

        Args:
            target: Callable, ``(receiver, method_name)`` pair or CallTarget
            supplied: Arguments by name (mapping) or by position (sequence)

        Returns:
            Whatever the target returns

        Raises:
            MissingTargetMethod: If the target method does not exist
        """
        call_target = CallTarget.of(target)
        func = call_target.callable()

        if supplied is None:
            named, positional = {}, ()
        elif isinstance(supplied, Mapping):
            named, positional = dict(supplied), ()
        else:
            named, positional = self._map_positional(call_target, tuple(supplied))

        resolved = self._resolver.resolve(call_target, named)

        args = list(positional)
        for name in self._slot_names(call_target)[:len(args)]:
            resolved.pop(name, None)

        # Positional-only parameters filled by injection still go by position
        for name in self._slot_names(call_target, positional_only=True)[len(args):]:
            if name not in resolved:
                break
            args.append(resolved.pop(name))

        return func(*args, **resolved)

    def call_hook(self, receiver: Any, name: str) -> Any:
        """
        Invoke a zero-argument lifecycle hook if ``receiver`` defines it.

        Absent hooks are skipped.
        """
        if not callable(getattr(receiver, name, None)):
            logger.debug("No %s hook on %s", name, type(receiver).__qualname__)
            return None

        return self.call(CallTarget(receiver=receiver, name=name))

    def _map_positional(
        self,
        call_target: CallTarget,
        values: Tuple[Any, ...],
    ) -> Tuple[Dict[str, Any], Tuple[Any, ...]]:
        """
        Name positional values by declaration order when they all fit.

        Values landing on positional-only parameters stay positional.
        """
        try:
            slots = [p for p in call_target.parameters() if p.is_positional]
        except Exception:
            return {}, values

        if len(values) > len(slots):
            return {}, values

        leading = sum(1 for p in slots[:len(values)] if p.kind is inspect.Parameter.POSITIONAL_ONLY)
        named = {param.name: value for param, value in zip(slots[leading:], values[leading:])}
        return named, values[:leading]

    def _slot_names(self, call_target: CallTarget, positional_only: bool = False) -> List[str]:
        try:
            parameters = call_target.parameters()
        except Exception:
            return []

        if positional_only:
            return [p.name for p in parameters if p.kind is inspect.Parameter.POSITIONAL_ONLY]
        return [p.name for p in parameters if p.is_positional]

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._container, name)

    def __repr__(self) -> str:
        return f"Invoker(registry={self._registry!r})"
