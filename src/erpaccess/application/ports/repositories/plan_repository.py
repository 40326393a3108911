"""Plan repository port."""

from typing import Protocol

from erpaccess.domain.entities import Plan


class PlanRepository(Protocol):
    """Port for subscription plan lookup."""

    async def get_by_id(self, plan_id: str) -> Plan | None: ...
