"""
Quire faults - structured error types.

Structural failures (a missing controller method, a void controller result,
rendering before compilation) are raised as typed faults and propagate to the
caller. Resolution problems are never faults: the resolver absorbs them.

Core exports:
- Fault: Base fault class
- FaultDomain: Domain taxonomy
- Severity: Severity levels
"""

from .core import (
    Fault,
    FaultDomain,
    Severity,
)

from .domains import (
    ConfigFault,
    ConfigInvalidFault,
    DIFault,
    MissingTargetMethod,
    FlowFault,
    VoidControllerResult,
    UncompiledRender,
    PageNotInitialized,
    ViewNotFound,
)

__all__ = [
    # Core types
    "Fault",
    "FaultDomain",
    "Severity",

    # Domain faults
    "ConfigFault",
    "ConfigInvalidFault",
    "DIFault",
    "MissingTargetMethod",
    "FlowFault",
    "VoidControllerResult",
    "UncompiledRender",
    "PageNotInitialized",
    "ViewNotFound",
]
