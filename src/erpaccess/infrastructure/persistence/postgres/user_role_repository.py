"""PostgreSQL user role repository implementation."""

from psycopg import AsyncConnection

from erpaccess.domain.entities import RoleMembership
from erpaccess.domain.value_objects import parse_role, parse_role_type
from erpaccess.infrastructure.persistence.postgres.connection import translate_errors


class PostgresUserRoleRepository:
    """User role membership repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_memberships(self, user_id: str) -> list[RoleMembership]:
        """List a user's role memberships in assignment order."""
        async with translate_errors("role membership lookup"):
            cur = await self._conn.execute(
                "SELECT role, role_type, company_id, is_active FROM user_role "
                "WHERE user_id = %s ORDER BY created_at, id",
                (user_id,),
            )
            rows = await cur.fetchall()
        return [
            RoleMembership(
                role=parse_role(r[0]),
                role_type=parse_role_type(r[1]),
                company_id=str(r[2]) if r[2] is not None else None,
                is_active=r[3],
            )
            for r in rows
        ]
