"""Role assignment authorization.

A user may only grant company roles ranked strictly below the role they hold
in the target company. An active global super_admin bypasses every check.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from types import MappingProxyType

from erpaccess.application.dto.assignment_dto import (
    INSUFFICIENT_ROLE_PRIVILEGES,
    MULTI_COMPANY_RESTRICTED,
    AssignmentDecision,
    AssignmentRequest,
)
from erpaccess.application.ports import UnitOfWorkFactory
from erpaccess.domain.entities import RoleMembership
from erpaccess.domain.exceptions import AuthorizationDenied, ValidationError
from erpaccess.domain.role_hierarchy import (
    can_assign,
    highest_company_role,
    rank,
    roles_below,
)
from erpaccess.domain.value_objects import (
    COMPANY_ROLES,
    Role,
    RoleType,
    parse_role,
    parse_role_type,
)

logger = logging.getLogger(__name__)

ALL_COMPANIES = "*"

# Company roles a user may combine with memberships in other companies,
# keyed by the role they already hold.
MULTI_COMPANY_ROLES: Mapping[Role, frozenset[Role]] = MappingProxyType(
    {
        Role.ADMIN_EMPRESA: frozenset({Role.ADMIN_EMPRESA, Role.MANAGER}),
        Role.MANAGER: frozenset({Role.MANAGER}),
        Role.EMPLOYEE: frozenset(),
        Role.VIEWER: frozenset(),
    }
)


def assignment_denial_reason(
    assigner_role: Role | None, target_role: Role, company_id: str | None
) -> str:
    """Human-readable reason for a denied company role assignment."""
    if assigner_role is None:
        return (
            f"You have no active role in company {company_id}; "
            "roles can only be assigned within companies you belong to"
        )
    if not roles_below(assigner_role):
        return f"Your role ({assigner_role}) cannot assign roles"
    if assigner_role is target_role:
        return (
            f"Users with the {assigner_role} role cannot assign the same role "
            "to others (privilege escalation)"
        )
    return f"Your role ({assigner_role}) cannot assign the {target_role} role"


def is_super_admin(memberships: Iterable[RoleMembership]) -> bool:
    return any(m.is_active_super_admin for m in memberships)


class RoleAssignmentAuthorizer:
    """Decides whether an assigner may grant a requested role."""

    def __init__(self, normalize_company_id: Callable[[str], str] | None = None) -> None:
        self._normalize_company_id = normalize_company_id

    def authorize(
        self,
        assigner: Iterable[RoleMembership],
        request: AssignmentRequest,
        actor_id: str | None = None,
    ) -> AssignmentDecision:
        """Authorize a role assignment.

        Raises ValidationError when role, roleType or (for company roles)
        companyId are missing or malformed. A denial is returned, not raised.
        """
        memberships = list(assigner)
        if is_super_admin(memberships):
            return AssignmentDecision.allow(
                Role.SUPER_ADMIN, attempted_role=request.role, company_id=request.company_id
            )

        target_role, role_type = self._parse(request)
        if role_type is RoleType.COMPANY and self._normalize_company_id:
            request = replace(
                request, company_id=self._normalize_company_id(request.company_id)
            )

        if role_type is RoleType.GLOBAL:
            return self._deny(
                "Only an active super_admin can assign global roles",
                None,
                request,
                actor_id,
            )

        company_id = request.company_id
        assigner_role = highest_company_role(memberships, company_id)
        if assigner_role is None or not can_assign(rank(assigner_role), rank(target_role)):
            return self._deny(
                assignment_denial_reason(assigner_role, target_role, company_id),
                assigner_role,
                request,
                actor_id,
            )

        return AssignmentDecision.allow(
            assigner_role, attempted_role=target_role.value, company_id=company_id
        )

    def authorize_update(
        self,
        assigner: Iterable[RoleMembership],
        request: AssignmentRequest,
        actor_id: str | None = None,
    ) -> AssignmentDecision:
        """Updates that leave role fields alone need no hierarchy check."""
        if not request.touches_role:
            return AssignmentDecision.allow()
        return self.authorize(assigner, request, actor_id)

    def assignable_roles(
        self, assigner: Iterable[RoleMembership], company_id: str
    ) -> list[Role]:
        """Company roles the assigner may grant in company_id, highest first."""
        memberships = list(assigner)
        if is_super_admin(memberships):
            return list(COMPANY_ROLES)
        role = highest_company_role(memberships, company_id)
        if role is None:
            return []
        return roles_below(role)

    def assignable_companies(self, assigner: Iterable[RoleMembership]) -> list[str]:
        """Companies where the assigner may grant roles; ["*"] for a super_admin."""
        memberships = list(assigner)
        if is_super_admin(memberships):
            return [ALL_COMPANIES]
        companies: list[str] = []
        for m in memberships:
            if not m.is_active or m.role_type is not RoleType.COMPANY:
                continue
            if roles_below(m.role) and m.company_id not in companies:
                companies.append(m.company_id)
        return companies

    def check_target_memberships(
        self,
        target: Iterable[RoleMembership],
        new_role: Role,
        company_id: str,
        actor_id: str | None = None,
    ) -> AssignmentDecision:
        """Whether the target user may hold new_role in company_id given their other roles.

        employee and viewer belong to a single company; admin_empresa may also be
        admin_empresa or manager elsewhere; manager only manager.
        """
        active = [m for m in target if m.is_active and m.role_type is RoleType.COMPANY]
        if not active:
            return AssignmentDecision.allow(attempted_role=new_role.value, company_id=company_id)

        if any(m.company_id == company_id for m in active):
            return self._deny(
                f"The user already has an active role in company {company_id}",
                None,
                AssignmentRequest(new_role.value, RoleType.COMPANY.value, company_id),
                actor_id,
                code=MULTI_COMPANY_RESTRICTED,
            )

        existing = active[0].role
        if new_role not in MULTI_COMPANY_ROLES.get(existing, frozenset()):
            if not MULTI_COMPANY_ROLES.get(existing):
                reason = (
                    f"Users with the {existing} role can only belong to one company; "
                    "revoke the current role before assigning a new one"
                )
            else:
                allowed = ", ".join(
                    r.value for r in COMPANY_ROLES if r in MULTI_COMPANY_ROLES[existing]
                )
                reason = (
                    f"A user with the {existing} role can only hold {allowed} "
                    "roles in other companies"
                )
            return self._deny(
                reason,
                None,
                AssignmentRequest(new_role.value, RoleType.COMPANY.value, company_id),
                actor_id,
                code=MULTI_COMPANY_RESTRICTED,
            )

        return AssignmentDecision.allow(attempted_role=new_role.value, company_id=company_id)

    @staticmethod
    def enforce(decision: AssignmentDecision) -> AssignmentDecision:
        """Raise AuthorizationDenied for a denied decision, return it otherwise."""
        if not decision.allowed:
            raise AuthorizationDenied(
                decision.reason or "Role assignment denied",
                current_role=(
                    decision.assigner_effective_role.value
                    if decision.assigner_effective_role
                    else None
                ),
                attempted_role=decision.attempted_role,
                company_id=decision.company_id,
                code=decision.code or INSUFFICIENT_ROLE_PRIVILEGES,
            )
        return decision

    @staticmethod
    def _parse(request: AssignmentRequest) -> tuple[Role, RoleType]:
        if not request.role or not request.role_type:
            raise ValidationError("roleType and role are required", code="MISSING_ROLE_INFO")
        role_type = parse_role_type(request.role_type)
        role = parse_role(request.role)
        if role_type is RoleType.COMPANY and not request.company_id:
            raise ValidationError(
                "companyId is required for company roles", code="MISSING_COMPANY_ID"
            )
        if role.role_type is not role_type:
            raise ValidationError(
                f"Role '{role}' is not a {role_type} role", code="ROLE_TYPE_MISMATCH"
            )
        return role, role_type

    @staticmethod
    def _deny(
        reason: str,
        assigner_role: Role | None,
        request: AssignmentRequest,
        actor_id: str | None = None,
        code: str = INSUFFICIENT_ROLE_PRIVILEGES,
    ) -> AssignmentDecision:
        logger.warning(
            "role_assignment_denied",
            extra={
                "actor_id": actor_id,
                "assigner_role": assigner_role.value if assigner_role else None,
                "attempted_role": request.role,
                "attempted_role_type": request.role_type,
                "company_id": request.company_id,
                "reason": reason,
                "code": code,
            },
        )
        return AssignmentDecision.deny(
            reason,
            assigner_effective_role=assigner_role,
            attempted_role=request.role,
            company_id=request.company_id,
            code=code,
        )


class AuthorizeRoleAssignmentUseCase:
    """Load the acting user's memberships and authorize a role assignment."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        authorizer: RoleAssignmentAuthorizer | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._authorizer = authorizer or RoleAssignmentAuthorizer()

    async def memberships_for(self, user_id: str) -> list[RoleMembership]:
        async with self._uow_factory() as uow:
            return await uow.user_roles.list_memberships(user_id)

    async def execute(
        self,
        actor_id: str,
        request: AssignmentRequest,
        *,
        update: bool = False,
        target_user_id: str | None = None,
    ) -> AssignmentDecision:
        """Authorize creation (or update) of a role membership for actor_id.

        With target_user_id, a creation also checks the target's existing
        company roles unless the actor is a super_admin. Updates change a
        membership the target already holds, so they skip that check.
        """
        assigner = await self.memberships_for(actor_id)
        if update:
            decision = self._authorizer.authorize_update(assigner, request, actor_id)
        else:
            decision = self._authorizer.authorize(assigner, request, actor_id)

        if (
            not decision.allowed
            or update
            or target_user_id is None
            or not request.touches_role
            or is_super_admin(assigner)
        ):
            return decision

        target = await self.memberships_for(target_user_id)
        target_check = self._authorizer.check_target_memberships(
            target, parse_role(request.role), decision.company_id, actor_id
        )
        if not target_check.allowed:
            return replace(target_check, assigner_effective_role=decision.assigner_effective_role)
        return decision

    async def assignable_roles(self, actor_id: str, company_id: str) -> list[Role]:
        return self._authorizer.assignable_roles(await self.memberships_for(actor_id), company_id)

    async def assignable_companies(self, actor_id: str) -> list[str]:
        return self._authorizer.assignable_companies(await self.memberships_for(actor_id))
