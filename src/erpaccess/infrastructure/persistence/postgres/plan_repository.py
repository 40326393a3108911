"""PostgreSQL plan repository implementation."""

from psycopg import AsyncConnection

from erpaccess.domain.entities import Plan, PlanFeatureSet
from erpaccess.infrastructure.persistence.postgres.connection import translate_errors


class PostgresPlanRepository:
    """Plan repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, plan_id: str) -> Plan | None:
        """Get plan by id."""
        async with translate_errors("plan lookup"):
            cur = await self._conn.execute(
                "SELECT id, name, type, features FROM plan WHERE id = %s",
                (plan_id,),
            )
            r = await cur.fetchone()
        if not r:
            return None
        return Plan(
            id=str(r[0]),
            name=r[1],
            type=r[2],
            features=PlanFeatureSet.from_mapping(r[3] or {}),
        )
