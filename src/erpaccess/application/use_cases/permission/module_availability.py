"""Module availability use case - plan-only module queries."""

from erpaccess.application.ports import UnitOfWorkFactory
from erpaccess.application.use_cases.permission.company_plan import CompanyPlanReader
from erpaccess.domain.catalogs import active_modules
from erpaccess.domain.exceptions import ValidationError
from erpaccess.domain.value_objects import FeatureKey, parse_feature_key


class ModuleAvailabilityUseCase:
    """Which plan modules a company can use. Independent of role."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._plan_reader = CompanyPlanReader(unit_of_work_factory)

    async def available_modules(self, company_id: str) -> list[FeatureKey]:
        """Enabled modules; empty when the company has no plan data."""
        if not company_id:
            raise ValidationError("companyId is required", code="MISSING_COMPANY_ID")
        plan = await self._plan_reader.read(company_id)
        if plan is None:
            return []
        return active_modules(plan.features)

    async def is_available(self, company_id: str, module: FeatureKey | str) -> bool:
        feature = parse_feature_key(module)
        if not company_id:
            raise ValidationError("companyId is required", code="MISSING_COMPANY_ID")
        plan = await self._plan_reader.read(company_id)
        if plan is None:
            return False
        return plan.features.is_enabled(feature)
