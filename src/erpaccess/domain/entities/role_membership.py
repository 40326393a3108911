"""Role membership entity - a role held by a user, optionally in a company."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from erpaccess.domain.exceptions import ValidationError
from erpaccess.domain.value_objects import Role, RoleType, parse_role, parse_role_type


@dataclass(frozen=True)
class RoleMembership:
    """Role held by a user. Company memberships always carry company_id, global never do."""

    role: Role
    role_type: RoleType
    company_id: str | None = None
    is_active: bool = True

    def __post_init__(self) -> None:
        if self.role.role_type is not self.role_type:
            raise ValidationError(
                f"Role '{self.role}' cannot be held as a {self.role_type} role",
                code="ROLE_TYPE_MISMATCH",
            )
        if self.role_type is RoleType.GLOBAL and self.company_id is not None:
            raise ValidationError(
                "Global role memberships cannot carry a companyId",
                code="UNEXPECTED_COMPANY_ID",
            )
        if self.role_type is RoleType.COMPANY and not self.company_id:
            raise ValidationError(
                "companyId is required for company roles", code="MISSING_COMPANY_ID"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RoleMembership":
        """Build from a loosely typed document (camelCase keys)."""
        company_id = data.get("companyId")
        return cls(
            role=parse_role(data.get("role")),
            role_type=parse_role_type(data.get("roleType")),
            company_id=str(company_id) if company_id is not None else None,
            is_active=bool(data.get("isActive", True)),
        )

    def is_active_in(self, company_id: str) -> bool:
        return (
            self.is_active
            and self.role_type is RoleType.COMPANY
            and self.company_id == company_id
        )

    @property
    def is_active_super_admin(self) -> bool:
        return (
            self.is_active
            and self.role_type is RoleType.GLOBAL
            and self.role is Role.SUPER_ADMIN
        )
