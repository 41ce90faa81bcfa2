"""Architecture tests using pytest-archon.

These tests enforce DDD architectural boundaries between layers
within the Onboarding and Fleet bounded contexts.
"""

from pytest_archon import archrule


class TestOnboardingLayerBoundaries:
    """Tests that the onboarding inner layers have no forbidden dependencies."""

    def test_domain_does_not_import_infrastructure(self):
        """Domain layer should not depend on infrastructure.

        Tenant and principal rules must not know about SQLAlchemy or
        the identity provider SDK.
        """
        (
            archrule("onboarding_domain_no_infrastructure")
            .match("onboarding.domain*")
            .should_not_import("onboarding.infrastructure*", "infrastructure*")
            .check("onboarding")
        )

    def test_domain_does_not_import_application(self):
        (
            archrule("onboarding_domain_no_application")
            .match("onboarding.domain*")
            .should_not_import("onboarding.application*")
            .check("onboarding")
        )

    def test_domain_does_not_import_frameworks(self):
        """Domain objects should be framework-agnostic."""
        (
            archrule("onboarding_domain_no_frameworks")
            .match("onboarding.domain*")
            .should_not_import("fastapi*", "starlette*", "sqlalchemy*", "supabase*")
            .check("onboarding")
        )

    def test_ports_do_not_import_infrastructure(self):
        """Ports define interfaces and must not know their adapters."""
        (
            archrule("onboarding_ports_no_infrastructure")
            .match("onboarding.ports*")
            .should_not_import("onboarding.infrastructure*")
            .check("onboarding")
        )

    def test_application_does_not_import_infrastructure(self):
        """Services depend on ports, never on concrete adapters."""
        (
            archrule("onboarding_application_no_infrastructure")
            .match("onboarding.application*")
            .should_not_import("onboarding.infrastructure*", "supabase*")
            .check("onboarding")
        )

    def test_application_does_not_import_presentation(self):
        (
            archrule("onboarding_application_no_presentation")
            .match("onboarding.application*")
            .should_not_import("onboarding.presentation*", "fastapi*")
            .check("onboarding")
        )


class TestFleetLayerBoundaries:
    """Tests that the fleet inner layers have no forbidden dependencies."""

    def test_domain_does_not_import_infrastructure(self):
        (
            archrule("fleet_domain_no_infrastructure")
            .match("fleet.domain*")
            .should_not_import("fleet.infrastructure*", "infrastructure*")
            .check("fleet")
        )

    def test_domain_does_not_import_application(self):
        (
            archrule("fleet_domain_no_application")
            .match("fleet.domain*")
            .should_not_import("fleet.application*")
            .check("fleet")
        )

    def test_domain_does_not_import_frameworks(self):
        (
            archrule("fleet_domain_no_frameworks")
            .match("fleet.domain*")
            .should_not_import("fastapi*", "starlette*", "sqlalchemy*", "httpx*")
            .check("fleet")
        )

    def test_ports_do_not_import_infrastructure(self):
        (
            archrule("fleet_ports_no_infrastructure")
            .match("fleet.ports*")
            .should_not_import("fleet.infrastructure*")
            .check("fleet")
        )

    def test_application_does_not_import_infrastructure(self):
        """The safety gate and pipeline only see the classifier port.

        Vision API details stay in the adapter.
        """
        (
            archrule("fleet_application_no_infrastructure")
            .match("fleet.application*")
            .should_not_import("fleet.infrastructure*", "httpx*")
            .check("fleet")
        )


class TestBoundedContextIsolation:
    """Tests that contexts meet only at their outer layers."""

    def test_fleet_core_does_not_import_onboarding(self):
        """Fleet reaches tenants through the operator directory port.

        Only the adapter, the dependency wiring and the routes may
        touch the onboarding context.
        """
        (
            archrule("fleet_core_no_onboarding")
            .match("fleet.domain*", "fleet.ports*", "fleet.application*")
            .should_not_import("onboarding*")
            .check("fleet")
        )

    def test_onboarding_does_not_import_fleet(self):
        (
            archrule("onboarding_no_fleet")
            .match("onboarding*")
            .should_not_import("fleet*")
            .check("onboarding")
        )


class TestSharedKernelBoundaries:
    """Tests that the shared kernel stays foundational."""

    def test_shared_kernel_does_not_import_bounded_contexts(self):
        """Shared kernel must not import from bounded contexts.

        The Shared Kernel is foundational and must not depend on any
        bounded context to avoid circular dependencies.
        """
        (
            archrule("shared_kernel_no_bounded_contexts")
            .match("shared_kernel*")
            .should_not_import("onboarding*", "fleet*")
            .check("shared_kernel")
        )

    def test_contexts_can_import_shared_kernel(self):
        (
            archrule("fleet_may_import_shared_kernel")
            .match("fleet*")
            .may_import("shared_kernel*")
            .check("fleet")
        )
