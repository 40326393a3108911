"""Pytest fixtures for ERP Access tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import pytest

from erpaccess.domain.entities import Company, Plan, PlanFeatureSet, RoleMembership
from erpaccess.domain.exceptions import InfrastructureFailure
from erpaccess.domain.value_objects import FeatureKey, Role, RoleType

COMPANY_1 = "11111111-1111-1111-1111-111111111111"
COMPANY_2 = "22222222-2222-2222-2222-222222222222"
NO_PLAN_COMPANY = "33333333-3333-3333-3333-333333333333"
CUSTOM_COMPANY = "44444444-4444-4444-4444-444444444444"


def company_role(role: Role, company_id: str, is_active: bool = True) -> RoleMembership:
    return RoleMembership(role, RoleType.COMPANY, company_id, is_active)


def super_admin(is_active: bool = True) -> RoleMembership:
    return RoleMembership(Role.SUPER_ADMIN, RoleType.GLOBAL, None, is_active)


# --- Fake repositories ---


class FakeCompanyRepository:
    """In-memory company repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, Company] = {}

    def add(self, company: Company) -> None:
        self._by_id[company.id] = company

    async def get_by_id(self, company_id: str) -> Company | None:
        return self._by_id.get(company_id)


class FakePlanRepository:
    """In-memory plan repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, Plan] = {}

    def add(self, plan: Plan) -> None:
        self._by_id[plan.id] = plan

    async def get_by_id(self, plan_id: str) -> Plan | None:
        return self._by_id.get(plan_id)


class FakeUserRoleRepository:
    """In-memory role membership repository."""

    def __init__(self) -> None:
        self._by_user: dict[str, list[RoleMembership]] = {}

    def add(self, user_id: str, *memberships: RoleMembership) -> None:
        self._by_user.setdefault(user_id, []).extend(memberships)

    async def list_memberships(self, user_id: str) -> list[RoleMembership]:
        return list(self._by_user.get(user_id, []))


class FailingCompanyRepository:
    """Company repository whose database is unreachable."""

    async def get_by_id(self, company_id: str) -> Company | None:
        raise InfrastructureFailure("company lookup failed")


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.companies = FakeCompanyRepository()
        self.plans = FakePlanRepository()
        self.user_roles = FakeUserRoleRepository()
        self.committed = False

    def add_company_with_plan(
        self,
        company_id: str,
        features: dict[str, bool],
        plan_name: str = "Plan Profesional",
        plan_type: str = "professional",
    ) -> None:
        plan_id = f"plan-{company_id}"
        self.plans.add(
            Plan(
                id=plan_id,
                name=plan_name,
                type=plan_type,
                features=PlanFeatureSet.from_mapping(features),
            )
        )
        self.companies.add(Company(id=company_id, name=f"Company {company_id}", plan_id=plan_id))

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        pass


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory yielding the same FakeUnitOfWork on every call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """UoW seeded with a few companies.

    COMPANY_1: inventory and crm enabled. COMPANY_2: everything but hrm.
    NO_PLAN_COMPANY: neither plan nor settings. CUSTOM_COMPANY: settings only.
    """
    uow = FakeUnitOfWork()
    uow.add_company_with_plan(
        COMPANY_1,
        {
            FeatureKey.INVENTORY_MANAGEMENT.value: True,
            FeatureKey.ACCOUNTING.value: False,
            FeatureKey.CRM.value: True,
        },
    )
    uow.add_company_with_plan(
        COMPANY_2,
        {key.value: key is not FeatureKey.HRM for key in FeatureKey},
        plan_name="Plan Empresarial",
        plan_type="enterprise",
    )
    uow.companies.add(Company(id=NO_PLAN_COMPANY, name="Sin plan S.A."))
    uow.companies.add(
        Company(
            id=CUSTOM_COMPANY,
            name="Custom S.L.",
            settings_features=PlanFeatureSet.of({FeatureKey.REPORTS}),
        )
    )
    return uow


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager with the seeded FakeUnitOfWork."""
    return make_uow_factory(fake_uow)
