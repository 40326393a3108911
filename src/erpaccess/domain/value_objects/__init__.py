"""Domain value objects."""

from erpaccess.domain.value_objects.feature_key import FeatureKey, parse_feature_key
from erpaccess.domain.value_objects.role import (
    COMPANY_ROLES,
    GLOBAL_ROLES,
    Role,
    RoleType,
    parse_company_role,
    parse_role,
    parse_role_type,
)

__all__ = [
    "COMPANY_ROLES",
    "GLOBAL_ROLES",
    "FeatureKey",
    "Role",
    "RoleType",
    "parse_company_role",
    "parse_feature_key",
    "parse_role",
    "parse_role_type",
]
