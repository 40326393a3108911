"""Roles and role types."""

from enum import StrEnum

from erpaccess.domain.exceptions import ValidationError


class RoleType(StrEnum):
    """Scope of a role membership."""

    GLOBAL = "global"
    COMPANY = "company"


class Role(StrEnum):
    """Every role known to the platform, global and company-scoped."""

    SUPER_ADMIN = "super_admin"
    ADMIN_EMPRESA = "admin_empresa"
    MANAGER = "manager"
    EMPLOYEE = "employee"
    VIEWER = "viewer"

    @property
    def role_type(self) -> RoleType:
        """Global roles are not scoped to a company."""
        if self is Role.SUPER_ADMIN:
            return RoleType.GLOBAL
        return RoleType.COMPANY

    @property
    def is_company_role(self) -> bool:
        return self.role_type is RoleType.COMPANY


GLOBAL_ROLES: tuple[Role, ...] = (Role.SUPER_ADMIN,)

# Highest privilege first.
COMPANY_ROLES: tuple[Role, ...] = (
    Role.ADMIN_EMPRESA,
    Role.MANAGER,
    Role.EMPLOYEE,
    Role.VIEWER,
)


def parse_role(raw: object) -> Role:
    """Map a raw transport value to a Role, rejecting unknown values."""
    if isinstance(raw, Role):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError("role is required", code="MISSING_ROLE_INFO")
    try:
        return Role(raw.strip())
    except ValueError:
        valid = ", ".join(r.value for r in Role)
        raise ValidationError(
            f"Invalid role '{raw}'. Must be one of: {valid}", code="INVALID_ROLE"
        ) from None


def parse_company_role(raw: object) -> Role:
    """Like parse_role, but only company-scoped roles are accepted."""
    role = parse_role(raw)
    if not role.is_company_role:
        valid = ", ".join(r.value for r in COMPANY_ROLES)
        raise ValidationError(
            f"Invalid role '{role}'. Must be one of: {valid}", code="INVALID_ROLE"
        )
    return role


def parse_role_type(raw: object) -> RoleType:
    """Map a raw transport value to a RoleType."""
    if isinstance(raw, RoleType):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError("roleType is required", code="MISSING_ROLE_INFO")
    try:
        return RoleType(raw.strip())
    except ValueError:
        raise ValidationError(
            f"Invalid roleType '{raw}'. Must be 'global' or 'company'",
            code="INVALID_ROLE_TYPE",
        ) from None
