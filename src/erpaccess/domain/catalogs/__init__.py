"""Static permission catalogs, built once at import time."""

from erpaccess.domain.catalogs.plan_features import (
    BASE_COMPANY_PERMISSIONS,
    FEATURE_PERMISSIONS,
    active_modules,
    is_permission_available,
    permissions_for_features,
    restricted_modules,
)
from erpaccess.domain.catalogs.role_permissions import (
    ROLE_DEFAULT_PERMISSIONS,
    default_permissions_for,
)

__all__ = [
    "BASE_COMPANY_PERMISSIONS",
    "FEATURE_PERMISSIONS",
    "ROLE_DEFAULT_PERMISSIONS",
    "active_modules",
    "default_permissions_for",
    "is_permission_available",
    "permissions_for_features",
    "restricted_modules",
]
