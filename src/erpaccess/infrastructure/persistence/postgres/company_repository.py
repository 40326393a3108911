"""PostgreSQL company repository implementation."""

from psycopg import AsyncConnection

from erpaccess.domain.entities import Company, PlanFeatureSet
from erpaccess.infrastructure.persistence.postgres.connection import translate_errors


class PostgresCompanyRepository:
    """Company repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, company_id: str) -> Company | None:
        """Get company by id, with its embedded feature settings."""
        async with translate_errors("company lookup"):
            cur = await self._conn.execute(
                "SELECT id, name, plan_id, settings_features FROM company WHERE id = %s",
                (company_id,),
            )
            r = await cur.fetchone()
        if not r:
            return None
        return Company(
            id=str(r[0]),
            name=r[1],
            plan_id=str(r[2]) if r[2] is not None else None,
            settings_features=PlanFeatureSet.from_mapping(r[3]) if r[3] is not None else None,
        )
