"""Application entry point and composition root."""

import logging

import falcon
import falcon.asgi

from erpaccess import __version__
from erpaccess.application.use_cases.assignment.authorize_role_assignment import (
    AuthorizeRoleAssignmentUseCase,
    RoleAssignmentAuthorizer,
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
from erpaccess.config import Settings, get_settings
from erpaccess.domain.exceptions import InfrastructureFailure
from erpaccess.infrastructure.auth.keycloak_provider import KeycloakProvider
from erpaccess.infrastructure.persistence.postgres.connection import create_pool
from erpaccess.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from erpaccess.interfaces.api.middleware.auth import AuthMiddleware
from erpaccess.interfaces.api.middleware.cors import CORSMiddleware
from erpaccess.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from erpaccess.interfaces.api.resources.permissions import (
    AssignableCompaniesResource,
    AssignableRolesResource,
    AvailableModulesResource,
    CalculatePermissionsResource,
    CheckModuleResource,
    ValidatePermissionsResource,
    parse_company_id,
)
from erpaccess.interfaces.api.resources.role_assignments import RoleAssignmentsResource
from erpaccess.logging_config import configure_logging

logger = logging.getLogger(__name__)


async def handle_infrastructure_failure(req, resp, ex, params):
    logger.error(
        "infrastructure_failure",
        exc_info=ex,
        extra={"path": req.path, "method": req.method},
    )
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Service temporarily unavailable", "code": "INFRASTRUCTURE_FAILURE"}


async def log_exception(req, resp, ex, params):
    logger.error(
        "unhandled_exception",
        exc_info=ex,
        extra={"path": req.path, "method": req.method},
    )
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def add_routes(
    app: falcon.asgi.App,
    resolve_permissions: ResolvePermissionsUseCase,
    validate_permissions: ValidatePermissionsUseCase,
    module_availability: ModuleAvailabilityUseCase,
    authorize_assignment: AuthorizeRoleAssignmentUseCase,
) -> None:
    """Register API routes and error handlers on app."""
    app.add_error_handler(Exception, log_exception)
    app.add_error_handler(InfrastructureFailure, handle_infrastructure_failure)

    app.add_route(
        "/v1/permissions/calculate", CalculatePermissionsResource(resolve_permissions)
    )
    app.add_route(
        "/v1/permissions/available-modules/{company_id}",
        AvailableModulesResource(module_availability),
    )
    app.add_route(
        "/v1/permissions/validate", ValidatePermissionsResource(validate_permissions)
    )
    app.add_route(
        "/v1/permissions/check-module/{company_id}/{module}",
        CheckModuleResource(module_availability),
    )
    app.add_route(
        "/v1/permissions/assignable-roles/{company_id}",
        AssignableRolesResource(authorize_assignment),
    )
    app.add_route(
        "/v1/permissions/assignable-companies",
        AssignableCompaniesResource(authorize_assignment),
    )
    app.add_route("/v1/role-assignments", RoleAssignmentsResource(authorize_assignment))


def create_erpaccess_app(settings: Settings | None = None) -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    configure_logging(settings)

    pool = create_pool(
        settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning(
            "auth_disabled",
            extra={"environment": settings.environment},
        )

    resolve_permissions = ResolvePermissionsUseCase(unit_of_work_factory=uow_factory)
    validate_permissions = ValidatePermissionsUseCase(resolve_permissions)
    module_availability = ModuleAvailabilityUseCase(unit_of_work_factory=uow_factory)
    authorize_assignment = AuthorizeRoleAssignmentUseCase(
        unit_of_work_factory=uow_factory,
        authorizer=RoleAssignmentAuthorizer(normalize_company_id=parse_company_id),
    )

    app = falcon.asgi.App(
        middleware=[
            CORSMiddleware(settings.cors_origin_list),
            PoolLifespanMiddleware(pool, open_timeout=settings.database_pool_open_timeout),
            AuthMiddleware(keycloak),
        ],
    )
    add_routes(
        app,
        resolve_permissions,
        validate_permissions,
        module_availability,
        authorize_assignment,
    )
    return app


def main() -> None:
    """CLI entry point - run the API under uvicorn."""
    import uvicorn

    settings = get_settings()
    app = create_erpaccess_app(settings)
    logger.info("starting", extra={"version": __version__, "port": settings.port})
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
