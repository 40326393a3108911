"""Resolve effective permissions use case."""

from erpaccess.application.dto.permission_dto import EffectivePermissionResult
from erpaccess.application.ports import UnitOfWorkFactory
from erpaccess.application.use_cases.permission.company_plan import CompanyPlanReader
from erpaccess.domain.catalogs import (
    active_modules,
    default_permissions_for,
    permissions_for_features,
    restricted_modules,
)
from erpaccess.domain.exceptions import ValidationError
from erpaccess.domain.value_objects import Role, parse_company_role


class ResolvePermissionsUseCase:
    """Effective permissions of a company role = role defaults ∩ plan permissions."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._plan_reader = CompanyPlanReader(unit_of_work_factory)

    async def execute(self, role: Role | str, company_id: str) -> EffectivePermissionResult:
        """Resolve permissions for role in company.

        A company without plan data gets the minimal safe result instead of
        an error.
        """
        company_role = parse_company_role(role)
        if not company_id:
            raise ValidationError("companyId is required", code="MISSING_COMPANY_ID")

        plan = await self._plan_reader.read(company_id)
        if plan is None:
            return EffectivePermissionResult.minimal()

        role_permissions = default_permissions_for(company_role)
        plan_permissions = permissions_for_features(plan.features)

        return EffectivePermissionResult(
            permissions=role_permissions & plan_permissions,
            available_modules=active_modules(plan.features),
            restricted_modules=restricted_modules(plan.features),
            plan_name=plan.name,
            plan_type=plan.type,
        )
