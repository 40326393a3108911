"""Plan feature catalog - which permissions each plan module unlocks."""

from collections.abc import Mapping
from types import MappingProxyType

from erpaccess.domain.entities import PlanFeatureSet
from erpaccess.domain.value_objects import FeatureKey

# Granted to every company regardless of plan: company self-service and
# the user management needed to administer the tenant.
BASE_COMPANY_PERMISSIONS: frozenset[str] = frozenset(
    {
        "company.edit",
        "company.configure",
        "company.branding",
        "company.billing",
        "settings.view",
        "settings.edit",
        "users.create",
        "users.edit",
        "users.delete",
        "users.view",
        "users.assign_roles",
    }
)

FEATURE_PERMISSIONS: Mapping[FeatureKey, frozenset[str]] = MappingProxyType(
    {
        FeatureKey.INVENTORY_MANAGEMENT: frozenset(
            {
                "inventory.create",
                "inventory.edit",
                "inventory.delete",
                "inventory.view",
                "inventory.transfer",
                "inventory.adjust",
            }
        ),
        FeatureKey.ACCOUNTING: frozenset(
            {
                "accounting.create",
                "accounting.edit",
                "accounting.delete",
                "accounting.view",
                "accounting.reports",
            }
        ),
        FeatureKey.HRM: frozenset(
            {"hrm.create", "hrm.edit", "hrm.delete", "hrm.view", "hrm.payroll"}
        ),
        FeatureKey.CRM: frozenset(
            {"crm.create", "crm.edit", "crm.delete", "crm.view", "crm.contacts"}
        ),
        FeatureKey.PROJECT_MANAGEMENT: frozenset(
            {
                "projects.create",
                "projects.edit",
                "projects.delete",
                "projects.view",
                "projects.assign",
            }
        ),
        FeatureKey.REPORTS: frozenset({"reports.view", "reports.export", "reports.create"}),
        FeatureKey.MULTI_CURRENCY: frozenset(),
        FeatureKey.API_ACCESS: frozenset({"api.read", "api.write"}),
        FeatureKey.CUSTOM_BRANDING: frozenset(),
        FeatureKey.PRIORITY_SUPPORT: frozenset(),
        FeatureKey.ADVANCED_ANALYTICS: frozenset({"analytics.view", "analytics.export"}),
        FeatureKey.AUDIT_LOG: frozenset({"audit.view", "audit.export"}),
        FeatureKey.CUSTOM_INTEGRATIONS: frozenset(
            {"integrations.configure", "integrations.view"}
        ),
        FeatureKey.DEDICATED_ACCOUNT: frozenset(),
    }
)


def permissions_for_features(features: PlanFeatureSet) -> frozenset[str]:
    """Base permissions plus everything unlocked by the enabled features."""
    permissions = set(BASE_COMPANY_PERMISSIONS)
    for feature in features.enabled:
        permissions |= FEATURE_PERMISSIONS.get(feature, frozenset())
    return frozenset(permissions)


def active_modules(features: PlanFeatureSet) -> list[FeatureKey]:
    """Enabled feature keys, in catalog order."""
    return [key for key in FeatureKey if features.is_enabled(key)]


def restricted_modules(features: PlanFeatureSet) -> list[FeatureKey]:
    """Disabled feature keys, in catalog order."""
    return [key for key in FeatureKey if not features.is_enabled(key)]


def is_permission_available(permission: str, features: PlanFeatureSet) -> bool:
    return permission in permissions_for_features(features)
