"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool

from erpaccess.infrastructure.persistence.postgres.company_repository import (
    PostgresCompanyRepository,
)
from erpaccess.infrastructure.persistence.postgres.connection import translate_errors
from erpaccess.infrastructure.persistence.postgres.plan_repository import (
    PostgresPlanRepository,
)
from erpaccess.infrastructure.persistence.postgres.user_role_repository import (
    PostgresUserRoleRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        async with translate_errors("connection checkout"):
            self._conn_cm = self._pool.connection()
            self._conn = await self._conn_cm.__aenter__()
        self._companies = PostgresCompanyRepository(self._conn)
        self._plans = PostgresPlanRepository(self._conn)
        self._user_roles = PostgresUserRoleRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def companies(self) -> PostgresCompanyRepository:
        return self._companies

    @property
    def plans(self) -> PostgresPlanRepository:
        return self._plans

    @property
    def user_roles(self) -> PostgresUserRoleRepository:
        return self._user_roles

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager)."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        uow = PostgresUnitOfWork(pool)
        async with uow:
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
