"""Role hierarchy - total order used to decide who may assign which role."""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from erpaccess.domain.entities import RoleMembership
from erpaccess.domain.value_objects import COMPANY_ROLES, Role

ROLE_RANKS: Mapping[Role, int] = MappingProxyType(
    {
        Role.SUPER_ADMIN: 100,
        Role.ADMIN_EMPRESA: 50,
        Role.MANAGER: 40,
        Role.EMPLOYEE: 30,
        Role.VIEWER: 20,
    }
)


def rank(role: Role) -> int:
    """Privilege rank of a role; higher is more privileged."""
    return ROLE_RANKS[role]


def can_assign(assigner_rank: int, target_rank: int) -> bool:
    """Only roles strictly below the assigner's own rank may be granted."""
    return assigner_rank > target_rank


def roles_below(role: Role) -> list[Role]:
    """Company roles an assigner holding `role` may grant, highest first."""
    return [r for r in COMPANY_ROLES if can_assign(rank(role), rank(r))]


def highest_company_role(
    memberships: Iterable[RoleMembership], company_id: str
) -> Role | None:
    """Highest-ranked active company role held in company_id, or None."""
    best: Role | None = None
    for membership in memberships:
        if not membership.is_active_in(company_id):
            continue
        if best is None or rank(membership.role) > rank(best):
            best = membership.role
    return best
