"""Validate permissions use case."""

from erpaccess.application.dto.permission_dto import PermissionValidationResult
from erpaccess.application.use_cases.permission.resolve_permissions import (
    ResolvePermissionsUseCase,
)
from erpaccess.domain.exceptions import ValidationError
from erpaccess.domain.value_objects import Role


class ValidatePermissionsUseCase:
    """Check a requested permission list against the effective set. Read-only."""

    def __init__(self, resolve_permissions: ResolvePermissionsUseCase) -> None:
        self._resolve = resolve_permissions

    async def execute(
        self,
        requested_permissions: list[str],
        role: Role | str,
        company_id: str,
    ) -> PermissionValidationResult:
        if not isinstance(requested_permissions, list) or not all(
            isinstance(p, str) for p in requested_permissions
        ):
            raise ValidationError(
                "'permissions' must be an array of strings", code="INVALID_PERMISSIONS"
            )

        effective = await self._resolve.execute(role, company_id)
        invalid = [p for p in requested_permissions if p not in effective.permissions]
        return PermissionValidationResult(valid=not invalid, invalid_permissions=invalid)
