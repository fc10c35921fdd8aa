"""
Instance registry - objects registered by the application at startup.

The registry only grows: instances are appended once and looked up by
identity or by runtime type for the lifetime of a request.
"""

import logging
from typing import Any, Iterator, List, Optional, Type, TypeVar


logger = logging.getLogger("quire.di")

T = TypeVar("T")


class InstanceRegistry:
    """
    Append-only list of registered application objects.

    Lookup by type prefers an exact class match, then falls back to the
    first instance assignable to the requested type (subclass, ABC or
    runtime-checkable protocol).

    Example:
        registry = InstanceRegistry()
        registry.register(mailer)
        registry.find_by_type(Mailer) is mailer
    """

    __slots__ = ("_instances",)

    def __init__(self):
        self._instances: List[Any] = []

    def register(self, instance: T) -> T:
        """
        Register an instance.

        Re-registering the same object is a no-op.

        Returns:
            The registered instance
        """
        if self.contains(instance):
            return instance

        self._instances.append(instance)
        logger.debug("Registered instance of %s", type(instance).__qualname__)
        return instance

    def contains(self, identity: Any) -> bool:
        """Check membership by identity."""
        return any(existing is identity for existing in self._instances)

    def find_by_type(self, target_type: Type[T]) -> Optional[T]:
        """
        Find the registered instance assignable to ``target_type``.

        Args:
            target_type: Class, ABC or runtime-checkable protocol

        Returns:
            The instance, or None if nothing matches
        """
        if not isinstance(target_type, type):
            return None

        for instance in self._instances:
            if type(instance) is target_type:
                return instance

        for instance in self._instances:
            try:
                if isinstance(instance, target_type):
                    return instance
            except TypeError:
                # Non-runtime-checkable protocols refuse isinstance()
                return None

        return None

    def __contains__(self, identity: Any) -> bool:
        return self.contains(identity)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._instances))

    def __len__(self) -> int:
        return len(self._instances)

    def __repr__(self) -> str:
        names = ", ".join(type(i).__name__ for i in self._instances)
        return f"InstanceRegistry([{names}])"
