"""Repository ports."""

from erpaccess.application.ports.repositories.company_repository import CompanyRepository
from erpaccess.application.ports.repositories.plan_repository import PlanRepository
from erpaccess.application.ports.repositories.user_role_repository import (
    UserRoleRepository,
)

__all__ = [
    "CompanyRepository",
    "PlanRepository",
    "UserRoleRepository",
]
