"""Default permissions per company role, before plan restriction."""

from collections.abc import Mapping
from types import MappingProxyType

from erpaccess.domain.exceptions import ValidationError
from erpaccess.domain.value_objects import Role

ROLE_DEFAULT_PERMISSIONS: Mapping[Role, frozenset[str]] = MappingProxyType(
    {
        Role.ADMIN_EMPRESA: frozenset(
            {
                "users.create",
                "users.edit",
                "users.delete",
                "users.view",
                "users.assign_roles",
                "company.edit",
                "company.configure",
                "company.branding",
                "company.billing",
                "inventory.create",
                "inventory.edit",
                "inventory.delete",
                "inventory.view",
                "inventory.transfer",
                "inventory.adjust",
                "accounting.create",
                "accounting.edit",
                "accounting.delete",
                "accounting.view",
                "accounting.reports",
                "hrm.create",
                "hrm.edit",
                "hrm.delete",
                "hrm.view",
                "hrm.payroll",
                "crm.create",
                "crm.edit",
                "crm.delete",
                "crm.view",
                "crm.contacts",
                "projects.create",
                "projects.edit",
                "projects.delete",
                "projects.view",
                "projects.assign",
                "reports.view",
                "reports.export",
                "reports.create",
                "settings.edit",
                "settings.view",
                "sales.create",
                "sales.edit",
                "sales.view",
                "sales.delete",
                "purchases.create",
                "purchases.edit",
                "purchases.view",
                "purchases.delete",
                "api.read",
                "api.write",
                "analytics.view",
                "analytics.export",
                "audit.view",
                "audit.export",
                "integrations.configure",
                "integrations.view",
            }
        ),
        Role.MANAGER: frozenset(
            {
                "users.view",
                "users.assign_roles",
                "inventory.create",
                "inventory.edit",
                "inventory.view",
                "inventory.transfer",
                "accounting.view",
                "accounting.reports",
                "hrm.view",
                "crm.create",
                "crm.edit",
                "crm.view",
                "projects.create",
                "projects.edit",
                "projects.view",
                "projects.assign",
                "reports.view",
                "reports.export",
                "settings.view",
                "sales.create",
                "sales.edit",
                "sales.view",
                "purchases.create",
                "purchases.edit",
                "purchases.view",
                "analytics.view",
            }
        ),
        Role.EMPLOYEE: frozenset(
            {
                "users.view",
                "inventory.view",
                "inventory.transfer",
                "accounting.view",
                "hrm.view",
                "crm.view",
                "projects.view",
                "reports.view",
                "settings.view",
                "sales.create",
                "sales.view",
                "purchases.view",
            }
        ),
        Role.VIEWER: frozenset(
            {
                "inventory.view",
                "accounting.view",
                "hrm.view",
                "crm.view",
                "projects.view",
                "reports.view",
                "sales.view",
                "purchases.view",
            }
        ),
    }
)


def default_permissions_for(role: Role) -> frozenset[str]:
    """Maximal permission set of a company role. super_admin has no table entry."""
    try:
        return ROLE_DEFAULT_PERMISSIONS[role]
    except KeyError:
        raise ValidationError(
            f"Role '{role}' has no company permission defaults", code="INVALID_ROLE"
        ) from None
