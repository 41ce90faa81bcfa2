"""Unit tests for the Tenant aggregate and its status transitions."""

import pytest

from onboarding.domain.aggregates import Principal, Tenant
from onboarding.domain.exceptions import InvalidStatusTransitionError
from onboarding.domain.value_objects import PrincipalId, Role, TenantId, TenantStatus
from shared_kernel.errors import ErrorKind


@pytest.fixture
def tenant() -> Tenant:
    return Tenant.create(
        owner_id=PrincipalId(value="owner-1"),
        name="  City Shuttle Sacco ",
        registration_number=" CS/2024/001 ",
        contact_email=" Admin@CityShuttle.co.ke ",
        verification_documents=["owner-1/1-cert.pdf"],
    )


REVIEWER = PrincipalId(value="reviewer-1")


class TestTenantCreate:
    def test_new_tenant_is_pending(self, tenant):
        assert tenant.status == TenantStatus.PENDING
        assert tenant.is_pending is True
        assert tenant.rejection_reason is None

    def test_normalizes_fields(self, tenant):
        assert tenant.name == "City Shuttle Sacco"
        assert tenant.registration_number == "CS/2024/001"
        assert tenant.contact_email == "admin@cityshuttle.co.ke"
        assert tenant.verification_documents == ("owner-1/1-cert.pdf",)

    def test_generates_ulid_id(self, tenant):
        assert TenantId.from_string(tenant.id.value) == tenant.id


class TestTenantTransitions:
    def test_approve_pending(self, tenant):
        tenant.approve(reviewed_by=REVIEWER)

        assert tenant.is_approved is True
        assert tenant.reviewed_by == REVIEWER
        assert tenant.rejection_reason is None

    def test_reject_pending_records_reason(self, tenant):
        tenant.reject("  Documents illegible ", reviewed_by=REVIEWER)

        assert tenant.status == TenantStatus.REJECTED
        assert tenant.rejection_reason == "Documents illegible"

    @pytest.mark.parametrize("first", ["approve", "reject"])
    def test_terminal_states_cannot_change(self, tenant, first):
        if first == "approve":
            tenant.approve(reviewed_by=REVIEWER)
        else:
            tenant.reject("no", reviewed_by=REVIEWER)

        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            tenant.approve(reviewed_by=REVIEWER)

        assert exc_info.value.kind == ErrorKind.CONFLICT

    def test_rejected_tenant_cannot_be_rejected_again(self, tenant):
        tenant.reject("no", reviewed_by=REVIEWER)

        with pytest.raises(InvalidStatusTransitionError):
            tenant.reject("still no", reviewed_by=REVIEWER)


class TestTenantStatus:
    def test_transition_table(self):
        assert TenantStatus.PENDING.can_transition_to(TenantStatus.APPROVED)
        assert TenantStatus.PENDING.can_transition_to(TenantStatus.REJECTED)
        assert not TenantStatus.APPROVED.can_transition_to(TenantStatus.REJECTED)
        assert not TenantStatus.REJECTED.can_transition_to(TenantStatus.PENDING)

    def test_terminal_states(self):
        assert TenantStatus.APPROVED.is_terminal
        assert TenantStatus.REJECTED.is_terminal
        assert not TenantStatus.PENDING.is_terminal


class TestPrincipal:
    def test_role_flags(self):
        reviewer = Principal(id=REVIEWER, email="r@example.com", role=Role.REVIEWER)
        rider = Principal(id=PrincipalId(value="p"), email="p@example.com")

        assert reviewer.is_reviewer is True
        assert rider.is_reviewer is False
        assert rider.is_operator_admin is False

    def test_equality_by_id(self):
        a = Principal(id=REVIEWER, email="a@example.com")
        b = Principal(id=REVIEWER, email="b@example.com", role=Role.REVIEWER)

        assert a == b
        assert len({a, b}) == 1

    def test_principal_id_rejects_blank(self):
        with pytest.raises(ValueError):
            PrincipalId.from_string("   ")
