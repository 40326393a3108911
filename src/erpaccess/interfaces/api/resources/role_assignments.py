"""Role assignment authorization resource."""

import falcon.asgi

from erpaccess.application.dto.assignment_dto import AssignmentRequest
from erpaccess.application.use_cases.assignment.authorize_role_assignment import (
    AuthorizeRoleAssignmentUseCase,
    RoleAssignmentAuthorizer,
)
from erpaccess.domain.exceptions import AuthorizationDenied, ValidationError
from erpaccess.interfaces.api.resources.permissions import validation_error


class RoleAssignmentsResource:
    """POST/PATCH /v1/role-assignments - may the acting user grant this role?

    Runs before a membership is created (POST) or updated (PATCH). The body
    carries roleType, role, companyId and optionally targetUserId.
    """

    def __init__(self, authorize_assignment: AuthorizeRoleAssignmentUseCase) -> None:
        self._authorize = authorize_assignment

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        await self._handle(req, resp, update=False)

    async def on_patch(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        await self._handle(req, resp, update=True)

    async def _handle(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, update: bool
    ) -> None:
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
            target_user_id = body.get("targetUserId")
            decision = await self._authorize.execute(
                user.user_id,
                AssignmentRequest.from_mapping(body),
                update=update,
                target_user_id=str(target_user_id) if target_user_id else None,
            )
            RoleAssignmentAuthorizer.enforce(decision)
        except ValidationError as e:
            validation_error(resp, e)
            return
        except AuthorizationDenied as e:
            resp.status = falcon.HTTP_403
            resp.media = {
                "error": e.reason,
                "code": e.code,
                "details": {
                    "currentRole": e.current_role,
                    "attemptedRole": e.attempted_role,
                    "companyId": e.company_id,
                },
            }
            return

        role = decision.assigner_effective_role
        resp.media = {"allowed": True, "assignerEffectiveRole": role.value if role else None}
        resp.status = falcon.HTTP_200
