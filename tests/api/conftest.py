"""Fixtures for API tests."""

import falcon.asgi
import pytest
from falcon.testing import TestClient

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
from erpaccess.domain.value_objects import Role
from erpaccess.interfaces.api.resources.permissions import parse_company_id
from erpaccess.main import add_routes

from tests.conftest import COMPANY_1, COMPANY_2, company_role, super_admin

TEST_USER_ID = "test-user-1"


class _TestUser:
    user_id = TEST_USER_ID


class AuthBypassMiddleware:
    """Middleware that sets context.user for testing."""

    async def process_request(self, req, resp):
        req.context.user = _TestUser()


class NoUserMiddleware:
    """Middleware that leaves the request unauthenticated."""

    async def process_request(self, req, resp):
        req.context.user = None


def _build_app(uow_factory, middleware) -> falcon.asgi.App:
    resolve_permissions = ResolvePermissionsUseCase(unit_of_work_factory=uow_factory)
    app = falcon.asgi.App(middleware=[middleware])
    add_routes(
        app,
        resolve_permissions,
        ValidatePermissionsUseCase(resolve_permissions),
        ModuleAvailabilityUseCase(unit_of_work_factory=uow_factory),
        AuthorizeRoleAssignmentUseCase(
            unit_of_work_factory=uow_factory,
            authorizer=RoleAssignmentAuthorizer(normalize_company_id=parse_company_id),
        ),
    )
    return app


@pytest.fixture
def app(fake_uow, uow_factory):
    """Falcon ASGI app; the test user is admin_empresa in COMPANY_1 and viewer in COMPANY_2."""
    fake_uow.user_roles.add(
        TEST_USER_ID,
        company_role(Role.ADMIN_EMPRESA, COMPANY_1),
        company_role(Role.VIEWER, COMPANY_2),
    )
    return _build_app(uow_factory, AuthBypassMiddleware())


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)


@pytest.fixture
def anonymous_client(uow_factory):
    return TestClient(_build_app(uow_factory, NoUserMiddleware()))


@pytest.fixture
def super_admin_client(fake_uow, uow_factory):
    fake_uow.user_roles.add(TEST_USER_ID, super_admin())
    return TestClient(_build_app(uow_factory, AuthBypassMiddleware()))
