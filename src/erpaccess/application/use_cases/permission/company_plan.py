"""Company plan reader - resolves the feature set in force for a company."""

import logging
from dataclasses import dataclass

from erpaccess.application.dto.permission_dto import CUSTOM_PLAN_NAME, CUSTOM_PLAN_TYPE
from erpaccess.application.ports import UnitOfWorkFactory
from erpaccess.domain.entities import PlanFeatureSet
from erpaccess.domain.exceptions import NotFound, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompanyPlan:
    """Feature set in force for a company plus the plan's display info."""

    features: PlanFeatureSet
    name: str
    type: str


class CompanyPlanReader:
    """Reads company -> plan -> features, falling back to company settings.

    Every call goes to the repositories; nothing is cached between calls so a
    plan change is visible on the next resolution.
    """

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def read(self, company_id: str) -> CompanyPlan | None:
        """Return the company's plan, or None when no feature data exists.

        Missing or malformed data degrades to None. InfrastructureFailure
        raised by the adapters propagates.
        """
        try:
            plan = await self._lookup(company_id)
        except (NotFound, ValidationError) as e:
            logger.warning(
                "permission_resolution_degraded",
                extra={"company_id": company_id, "cause": str(e)},
            )
            return None
        if plan is None:
            logger.warning(
                "permission_resolution_degraded",
                extra={"company_id": company_id, "cause": "no plan or feature settings"},
            )
        return plan

    async def _lookup(self, company_id: str) -> CompanyPlan | None:
        async with self._uow_factory() as uow:
            company = await uow.companies.get_by_id(company_id)
            if company is None:
                return None

            if company.plan_id:
                plan = await uow.plans.get_by_id(company.plan_id)
                if plan is not None:
                    return CompanyPlan(
                        features=plan.features,
                        name=plan.name or CUSTOM_PLAN_NAME,
                        type=plan.type or CUSTOM_PLAN_TYPE,
                    )

            if company.settings_features is not None:
                return CompanyPlan(
                    features=company.settings_features,
                    name=CUSTOM_PLAN_NAME,
                    type=CUSTOM_PLAN_TYPE,
                )
            return None
