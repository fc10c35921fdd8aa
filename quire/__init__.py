"""
Quire - page rendering core for content-driven sites

Complete integration of:
- DI: Type-based autowiring of controller constructors and actions
- Page: Route-driven compilation with locale-scoped settings and metadata
- View: Data snapshots rendered through Jinja2 view files
- SEO: Metadata composition with view-data placeholders
- Faults: Structured error handling with fault domains
"""

__version__ = "0.1.0"

# ============================================================================
# Core Framework
# ============================================================================

from .config import ConfigLoader, QuireConfig, configure_logging
from .context import RequestContext
from .controller import Controller
from .kernel import Kernel
from .page import Page
from .view import View, placeholder_table

# ============================================================================
# Collaborators
# ============================================================================

from .http import Request
from .locale import Locale
from .store import Node
from .templates import TemplateEngine

# ============================================================================
# Dependency Injection
# ============================================================================

from .di import (
    CallTarget,
    Container,
    InstanceRegistry,
    Invoker,
    Resolver,
)

# ============================================================================
# SEO
# ============================================================================

from .seo import (
    MetadataEntry,
    PageMetadataComposer,
    SEO,
)

# ============================================================================
# Faults
# ============================================================================

from .faults import (
    Fault,
    FaultDomain,
    Severity,
    MissingTargetMethod,
    VoidControllerResult,
    UncompiledRender,
    PageNotInitialized,
    ViewNotFound,
    ConfigInvalidFault,
)

__all__ = [
    "__version__",
    "ConfigLoader",
    "QuireConfig",
    "configure_logging",
    "RequestContext",
    "Controller",
    "Kernel",
    "Page",
    "View",
    "placeholder_table",
    "Request",
    "Locale",
    "Node",
    "TemplateEngine",
    "CallTarget",
    "Container",
    "InstanceRegistry",
    "Invoker",
    "Resolver",
    "MetadataEntry",
    "PageMetadataComposer",
    "SEO",
    "Fault",
    "FaultDomain",
    "Severity",
    "MissingTargetMethod",
    "VoidControllerResult",
    "UncompiledRender",
    "PageNotInitialized",
    "ViewNotFound",
    "ConfigInvalidFault",
]
