"""Domain entities."""

from erpaccess.domain.entities.plan import Company, Plan, PlanFeatureSet
from erpaccess.domain.entities.role_membership import RoleMembership

__all__ = [
    "Company",
    "Plan",
    "PlanFeatureSet",
    "RoleMembership",
]
