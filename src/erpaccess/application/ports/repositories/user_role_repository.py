"""User role membership repository port."""

from typing import Protocol

from erpaccess.domain.entities import RoleMembership


class UserRoleRepository(Protocol):
    """Port for reading a user's role memberships."""

    async def list_memberships(self, user_id: str) -> list[RoleMembership]: ...
