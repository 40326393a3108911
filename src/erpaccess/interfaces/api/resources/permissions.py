"""Permissions API resources."""

from uuid import UUID

import falcon.asgi

from erpaccess.application.use_cases.assignment.authorize_role_assignment import (
    AuthorizeRoleAssignmentUseCase,
)
from erpaccess.application.use_cases.permission.module_availability import (
    ModuleAvailabilityUseCase,
)
from erpaccess.application.use_cases.permission.resolve_permissions import (
    ResolvePermissionsUseCase,
)
from erpaccess.application.use_cases.permission.validate_permissions import (
    ValidatePermissionsUseCase,
)
from erpaccess.domain.exceptions import ValidationError


def parse_company_id(raw: object) -> str:
    """Normalize a company id from the request; it must be a UUID."""
    if not raw:
        raise ValidationError("companyId is required", code="MISSING_COMPANY_ID")
    try:
        return str(UUID(str(raw)))
    except ValueError:
        raise ValidationError(f"Invalid companyId '{raw}'", code="INVALID_COMPANY_ID") from None


def validation_error(resp: falcon.asgi.Response, e: ValidationError) -> None:
    resp.status = falcon.HTTP_400
    resp.media = {"error": str(e), "code": e.code}


class CalculatePermissionsResource:
    """GET /v1/permissions/calculate?companyId=&role= - effective permissions."""

    def __init__(self, resolve_permissions: ResolvePermissionsUseCase) -> None:
        self._resolve = resolve_permissions

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            company_id = parse_company_id(req.get_param("companyId"))
            result = await self._resolve.execute(req.get_param("role"), company_id)
        except ValidationError as e:
            validation_error(resp, e)
            return

        permissions = sorted(result.permissions)
        resp.media = {
            "permissions": permissions,
            "availableModules": [m.value for m in result.available_modules],
            "restrictedModules": [m.value for m in result.restricted_modules],
            "planInfo": {"name": result.plan_name, "type": result.plan_type},
            "metadata": {
                "totalPermissions": len(permissions),
                "totalAvailableModules": len(result.available_modules),
                "totalRestrictedModules": len(result.restricted_modules),
            },
        }
        resp.status = falcon.HTTP_200


class AvailableModulesResource:
    """GET /v1/permissions/available-modules/{company_id}."""

    def __init__(self, module_availability: ModuleAvailabilityUseCase) -> None:
        self._modules = module_availability

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, company_id: str
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            company_id = parse_company_id(company_id)
            modules = await self._modules.available_modules(company_id)
        except ValidationError as e:
            validation_error(resp, e)
            return

        resp.media = {
            "companyId": company_id,
            "availableModules": [m.value for m in modules],
            "totalModules": len(modules),
        }
        resp.status = falcon.HTTP_200


class ValidatePermissionsResource:
    """POST /v1/permissions/validate - check requested permissions for a role."""

    def __init__(self, validate_permissions: ValidatePermissionsUseCase) -> None:
        self._validate = validate_permissions

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        body = await req.get_media()
        if not isinstance(body, dict):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Request body must be a JSON object", "code": "INVALID_BODY"}
            return

        try:
            company_id = parse_company_id(body.get("companyId"))
            result = await self._validate.execute(
                body.get("permissions"), body.get("role"), company_id
            )
        except ValidationError as e:
            validation_error(resp, e)
            return

        total = len(body["permissions"])
        resp.media = {
            "valid": result.valid,
            "invalidPermissions": result.invalid_permissions,
            "totalValidated": total,
            "totalInvalid": len(result.invalid_permissions),
        }
        resp.status = falcon.HTTP_200


class CheckModuleResource:
    """GET /v1/permissions/check-module/{company_id}/{module}."""

    def __init__(self, module_availability: ModuleAvailabilityUseCase) -> None:
        self._modules = module_availability

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        company_id: str,
        module: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            company_id = parse_company_id(company_id)
            available = await self._modules.is_available(company_id, module)
        except ValidationError as e:
            validation_error(resp, e)
            return

        resp.media = {"companyId": company_id, "module": module, "available": available}
        resp.status = falcon.HTTP_200


class AssignableRolesResource:
    """GET /v1/permissions/assignable-roles/{company_id} - roles the user may grant."""

    def __init__(self, authorize_assignment: AuthorizeRoleAssignmentUseCase) -> None:
        self._assignment = authorize_assignment

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, company_id: str
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            company_id = parse_company_id(company_id)
            roles = await self._assignment.assignable_roles(user.user_id, company_id)
        except ValidationError as e:
            validation_error(resp, e)
            return

        resp.media = {"companyId": company_id, "assignableRoles": [r.value for r in roles]}
        resp.status = falcon.HTTP_200


class AssignableCompaniesResource:
    """GET /v1/permissions/assignable-companies - companies where the user may grant roles."""

    def __init__(self, authorize_assignment: AuthorizeRoleAssignmentUseCase) -> None:
        self._assignment = authorize_assignment

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            companies = await self._assignment.assignable_companies(user.user_id)
        except ValidationError as e:
            validation_error(resp, e)
            return

        resp.media = {"companies": companies}
        resp.status = falcon.HTTP_200
