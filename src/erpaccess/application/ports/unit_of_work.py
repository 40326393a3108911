"""Unit of Work port - read boundary over the repositories."""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from erpaccess.application.ports.repositories.company_repository import CompanyRepository
from erpaccess.application.ports.repositories.plan_repository import PlanRepository
from erpaccess.application.ports.repositories.user_role_repository import (
    UserRoleRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages connection and repository access."""

    @property
    def companies(self) -> CompanyRepository: ...

    @property
    def plans(self) -> PlanRepository: ...

    @property
    def user_roles(self) -> UserRoleRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    def __call__(self) -> AbstractAsyncContextManager[UnitOfWork]: ...
