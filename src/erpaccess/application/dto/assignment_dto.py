"""Role assignment DTOs."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from erpaccess.domain.value_objects import Role

INSUFFICIENT_ROLE_PRIVILEGES = "INSUFFICIENT_ROLE_PRIVILEGES"
MULTI_COMPANY_RESTRICTED = "MULTI_COMPANY_RESTRICTED"


@dataclass(frozen=True)
class AssignmentRequest:
    """Requested role assignment, as received from the transport (unparsed)."""

    role: str | None = None
    role_type: str | None = None
    company_id: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AssignmentRequest":
        company_id = data.get("companyId")
        return cls(
            role=data.get("role"),
            role_type=data.get("roleType"),
            company_id=str(company_id) if company_id else None,
        )

    @property
    def touches_role(self) -> bool:
        """True when role fields are part of the request."""
        return bool(self.role) or bool(self.role_type)


@dataclass(frozen=True)
class AssignmentDecision:
    """Allow/deny outcome of a role assignment check."""

    allowed: bool
    reason: str | None = None
    assigner_effective_role: Role | None = None
    attempted_role: str | None = None
    company_id: str | None = None
    code: str | None = None

    @classmethod
    def allow(
        cls,
        assigner_effective_role: Role | None = None,
        attempted_role: str | None = None,
        company_id: str | None = None,
    ) -> "AssignmentDecision":
        return cls(
            allowed=True,
            assigner_effective_role=assigner_effective_role,
            attempted_role=attempted_role,
            company_id=company_id,
        )

    @classmethod
    def deny(
        cls,
        reason: str,
        assigner_effective_role: Role | None = None,
        attempted_role: str | None = None,
        company_id: str | None = None,
        code: str = INSUFFICIENT_ROLE_PRIVILEGES,
    ) -> "AssignmentDecision":
        return cls(
            allowed=False,
            reason=reason,
            assigner_effective_role=assigner_effective_role,
            attempted_role=attempted_role,
            company_id=company_id,
            code=code,
        )
