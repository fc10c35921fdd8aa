"""
Faults system (faults/)

Tests Fault, FaultDomain, Severity and the domain faults.
"""

import pytest

from quire.faults import (
    ConfigInvalidFault,
    Fault,
    FaultDomain,
    MissingTargetMethod,
    PageNotInitialized,
    Severity,
    UncompiledRender,
    ViewNotFound,
    VoidControllerResult,
)
from quire.faults.core import DOMAIN_DEFAULTS


class PagesController:
    pass


# ============================================================================
# Severity & FaultDomain
# ============================================================================

class TestSeverity:

    def test_values(self):
        assert Severity.INFO == "info"
        assert Severity.WARN == "warn"
        assert Severity.ERROR == "error"
        assert Severity.FATAL == "fatal"


class TestFaultDomain:

    def test_standard_domains(self):
        assert FaultDomain.CONFIG.name == "config"
        assert FaultDomain.DI.name == "di"
        assert FaultDomain.FLOW.name == "flow"
        assert FaultDomain.TEMPLATE.name == "template"

    def test_equality(self):
        assert FaultDomain("flow") == FaultDomain.FLOW
        assert FaultDomain.FLOW == "flow"
        assert hash(FaultDomain("flow")) == hash(FaultDomain.FLOW)

    def test_defaults(self):
        assert DOMAIN_DEFAULTS[FaultDomain.CONFIG] == Severity.FATAL
        assert DOMAIN_DEFAULTS[FaultDomain.FLOW] == Severity.ERROR


# ============================================================================
# Fault
# ============================================================================

class TestFault:

    def test_basic(self):
        fault = Fault(code="X", message="broken", domain=FaultDomain.FLOW)
        assert str(fault) == "[X] broken"
        assert fault.severity == Severity.ERROR
        assert fault.metadata == {}

    def test_missing_fields(self):
        with pytest.raises(TypeError):
            Fault(code="X", message="broken")

    def test_to_dict(self):
        fault = Fault(
            code="X",
            message="broken",
            domain=FaultDomain.TEMPLATE,
            severity=Severity.WARN,
            metadata={"view": "home"},
        )
        assert fault.to_dict() == {
            "code": "X",
            "message": "broken",
            "domain": "template",
            "severity": "warn",
            "metadata": {"view": "home"},
        }


# ============================================================================
# Domain faults
# ============================================================================

class TestDomainFaults:

    def test_missing_target_method(self):
        fault = MissingTargetMethod(PagesController(), "show")
        assert fault.domain == FaultDomain.DI
        assert fault.message == "Method show not found in controller PagesController"

    def test_missing_target_method_on_class(self):
        fault = MissingTargetMethod(PagesController, "show")
        assert fault.metadata["receiver"] == "PagesController"

    def test_void_controller_result(self):
        fault = VoidControllerResult("PagesController", "show")
        assert fault.code == "VOID_CONTROLLER_RESULT"
        assert fault.domain == FaultDomain.FLOW
        assert "PagesController.show" in fault.message

    def test_flow_faults(self):
        assert UncompiledRender().code == "UNCOMPILED_RENDER"
        assert PageNotInitialized().code == "PAGE_NOT_INITIALIZED"

    def test_view_not_found(self):
        fault = ViewNotFound("pages.home", "pages/home.html")
        assert fault.domain == FaultDomain.TEMPLATE
        assert fault.severity == Severity.ERROR

    def test_config_invalid(self):
        fault = ConfigInvalidFault("views_path", "expected str, got int")
        assert fault.severity == Severity.FATAL
        assert isinstance(fault, Fault)
