"""
Quire faults - Domain-specific fault types.

Provides concrete fault classes for:
- CONFIG faults
- DI faults
- FLOW faults (page compilation / rendering)
- TEMPLATE faults
"""

from typing import Any, Optional
from .core import Fault, FaultDomain, Severity


# ============================================================================
# CONFIG Faults
# ============================================================================

class ConfigFault(Fault):
    """Base class for configuration faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.FATAL,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.CONFIG,
            severity=severity,
            metadata=metadata,
        )


class ConfigInvalidFault(ConfigFault):
    """Configuration value is invalid."""

    def __init__(self, key: str, reason: str):
        super().__init__(
            code="CONFIG_INVALID",
            message=f"Configuration key '{key}' is invalid: {reason}",
            metadata={"key": key, "reason": reason},
        )


# ============================================================================
# DI Faults
# ============================================================================

class DIFault(Fault):
    """Base class for dependency injection faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.DI,
            severity=severity,
            metadata=metadata,
        )


class MissingTargetMethod(DIFault):
    """The call target names a method its receiver does not have."""

    def __init__(self, receiver: Any, method: str):
        owner = receiver if isinstance(receiver, type) else type(receiver)
        super().__init__(
            code="MISSING_TARGET_METHOD",
            message=f"Method {method} not found in controller {owner.__qualname__}",
            metadata={"receiver": owner.__qualname__, "method": method},
        )


# ============================================================================
# FLOW Faults
# ============================================================================

class FlowFault(Fault):
    """Base class for page compilation and rendering faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.FLOW,
            severity=severity,
            metadata=metadata,
        )


class VoidControllerResult(FlowFault):
    """A controller action returned nothing usable."""

    def __init__(self, controller: str, action: str):
        super().__init__(
            code="VOID_CONTROLLER_RESULT",
            message=f"Return value from controller {controller}.{action} must not be void",
            metadata={"controller": controller, "action": action},
        )


class UncompiledRender(FlowFault):
    """Rendering was requested before the page compiled."""

    def __init__(self):
        super().__init__(
            code="UNCOMPILED_RENDER",
            message="Page must be compiled before it is rendered",
        )


class PageNotInitialized(FlowFault):
    """Compilation was requested before the page received a route."""

    def __init__(self):
        super().__init__(
            code="PAGE_NOT_INITIALIZED",
            message="Page must be initialized with a route before compile()",
        )


# ============================================================================
# TEMPLATE Faults
# ============================================================================

class ViewNotFound(Fault):
    """View file could not be located by the template engine."""

    def __init__(self, view: str, path: str):
        super().__init__(
            code="VIEW_NOT_FOUND",
            message=f"View '{view}' not found ({path})",
            domain=FaultDomain.TEMPLATE,
            metadata={"view": view, "path": path},
        )
