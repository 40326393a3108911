"""Company repository port."""

from typing import Protocol

from erpaccess.domain.entities import Company


class CompanyRepository(Protocol):
    """Port for company lookup."""

    async def get_by_id(self, company_id: str) -> Company | None: ...
