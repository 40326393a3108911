"""API resource tests."""

import pytest

from erpaccess.domain.catalogs import default_permissions_for
from erpaccess.domain.value_objects import FeatureKey, Role

from tests.conftest import (
    COMPANY_1,
    COMPANY_2,
    CUSTOM_COMPANY,
    NO_PLAN_COMPANY,
    FailingCompanyRepository,
    company_role,
)

OTHER_COMPANY = "55555555-5555-5555-5555-555555555555"


class TestCalculatePermissions:
    def test_manager(self, client) -> None:
        result = client.simulate_get(
            "/v1/permissions/calculate", params={"companyId": COMPANY_1, "role": "manager"}
        )
        assert result.status_code == 200
        body = result.json
        assert "crm.view" in body["permissions"]
        assert "accounting.view" not in body["permissions"]
        assert body["permissions"] == sorted(body["permissions"])
        assert body["availableModules"] == ["inventoryManagement", "crm"]
        assert len(body["restrictedModules"]) == len(FeatureKey) - 2
        assert body["planInfo"] == {"name": "Plan Profesional", "type": "professional"}
        assert body["metadata"] == {
            "totalPermissions": len(body["permissions"]),
            "totalAvailableModules": 2,
            "totalRestrictedModules": len(FeatureKey) - 2,
        }

    def test_no_plan(self, client) -> None:
        result = client.simulate_get(
            "/v1/permissions/calculate", params={"companyId": NO_PLAN_COMPANY, "role": "viewer"}
        )
        assert result.status_code == 200
        assert result.json["permissions"] == ["company.edit", "settings.view"]
        assert result.json["availableModules"] == []
        assert result.json["restrictedModules"] == []
        assert result.json["planInfo"] == {"name": "Sin plan", "type": "unknown"}

    def test_custom_plan(self, client) -> None:
        result = client.simulate_get(
            "/v1/permissions/calculate", params={"companyId": CUSTOM_COMPANY, "role": "employee"}
        )
        assert result.json["planInfo"] == {"name": "Plan Personalizado", "type": "custom"}

    @pytest.mark.parametrize(
        "params,code",
        [
            ({"role": "manager"}, "MISSING_COMPANY_ID"),
            ({"companyId": "not-a-uuid", "role": "manager"}, "INVALID_COMPANY_ID"),
            ({"companyId": COMPANY_1}, "MISSING_ROLE_INFO"),
            ({"companyId": COMPANY_1, "role": "owner"}, "INVALID_ROLE"),
            ({"companyId": COMPANY_1, "role": "super_admin"}, "INVALID_ROLE"),
        ],
    )
    def test_bad_input(self, client, params, code) -> None:
        result = client.simulate_get("/v1/permissions/calculate", params=params)
        assert result.status_code == 400
        assert result.json["code"] == code
        assert result.json["error"]

    def test_infrastructure_failure_is_500(self, client, fake_uow) -> None:
        fake_uow.companies = FailingCompanyRepository()
        result = client.simulate_get(
            "/v1/permissions/calculate", params={"companyId": COMPANY_1, "role": "manager"}
        )
        assert result.status_code == 500
        assert result.json["code"] == "INFRASTRUCTURE_FAILURE"

    def test_unauthenticated(self, anonymous_client) -> None:
        result = anonymous_client.simulate_get(
            "/v1/permissions/calculate", params={"companyId": COMPANY_1, "role": "manager"}
        )
        assert result.status_code == 401


class TestAvailableModules:
    def test_lists_modules(self, client) -> None:
        result = client.simulate_get(f"/v1/permissions/available-modules/{COMPANY_1}")
        assert result.status_code == 200
        assert result.json == {
            "companyId": COMPANY_1,
            "availableModules": ["inventoryManagement", "crm"],
            "totalModules": 2,
        }

    def test_invalid_company_id(self, client) -> None:
        result = client.simulate_get("/v1/permissions/available-modules/abc")
        assert result.status_code == 400

    def test_unauthenticated(self, anonymous_client) -> None:
        result = anonymous_client.simulate_get(f"/v1/permissions/available-modules/{COMPANY_1}")
        assert result.status_code == 401


class TestValidatePermissions:
    def test_employee_without_hrm(self, client) -> None:
        result = client.simulate_post(
            "/v1/permissions/validate",
            json={
                "permissions": ["inventory.view", "hrm.payroll"],
                "role": "employee",
                "companyId": COMPANY_2,
            },
        )
        assert result.status_code == 200
        assert result.json == {
            "valid": False,
            "invalidPermissions": ["hrm.payroll"],
            "totalValidated": 2,
            "totalInvalid": 1,
        }

    def test_permissions_must_be_list(self, client) -> None:
        result = client.simulate_post(
            "/v1/permissions/validate",
            json={"permissions": "crm.view", "role": "manager", "companyId": COMPANY_1},
        )
        assert result.status_code == 400
        assert result.json["code"] == "INVALID_PERMISSIONS"

    def test_body_must_be_object(self, client) -> None:
        result = client.simulate_post("/v1/permissions/validate", json=["crm.view"])
        assert result.status_code == 400
        assert result.json["code"] == "INVALID_BODY"


class TestCheckModule:
    def test_enabled(self, client) -> None:
        result = client.simulate_get(f"/v1/permissions/check-module/{COMPANY_1}/crm")
        assert result.status_code == 200
        assert result.json == {"companyId": COMPANY_1, "module": "crm", "available": True}

    def test_disabled(self, client) -> None:
        result = client.simulate_get(f"/v1/permissions/check-module/{COMPANY_2}/hrm")
        assert result.json["available"] is False

    def test_unknown_module(self, client) -> None:
        result = client.simulate_get(f"/v1/permissions/check-module/{COMPANY_1}/payroll")
        assert result.status_code == 400
        assert result.json["code"] == "INVALID_MODULE"


class TestAssignmentHelpers:
    def test_assignable_roles(self, client) -> None:
        result = client.simulate_get(f"/v1/permissions/assignable-roles/{COMPANY_1}")
        assert result.status_code == 200
        assert result.json == {
            "companyId": COMPANY_1,
            "assignableRoles": ["manager", "employee", "viewer"],
        }

    def test_assignable_roles_as_viewer(self, client) -> None:
        result = client.simulate_get(f"/v1/permissions/assignable-roles/{COMPANY_2}")
        assert result.json["assignableRoles"] == []

    def test_assignable_companies(self, client) -> None:
        result = client.simulate_get("/v1/permissions/assignable-companies")
        assert result.status_code == 200
        assert result.json == {"companies": [COMPANY_1]}

    def test_assignable_companies_super_admin(self, super_admin_client) -> None:
        result = super_admin_client.simulate_get("/v1/permissions/assignable-companies")
        assert result.json == {"companies": ["*"]}


class TestRoleAssignments:
    def test_allowed(self, client) -> None:
        result = client.simulate_post(
            "/v1/role-assignments",
            json={"roleType": "company", "role": "manager", "companyId": COMPANY_1},
        )
        assert result.status_code == 200
        assert result.json == {"allowed": True, "assignerEffectiveRole": "admin_empresa"}

    def test_same_rank_denied(self, client) -> None:
        result = client.simulate_post(
            "/v1/role-assignments",
            json={"roleType": "company", "role": "admin_empresa", "companyId": COMPANY_1},
        )
        assert result.status_code == 403
        assert result.json["code"] == "INSUFFICIENT_ROLE_PRIVILEGES"
        assert result.json["details"] == {
            "currentRole": "admin_empresa",
            "attemptedRole": "admin_empresa",
            "companyId": COMPANY_1,
        }

    def test_other_company_denied(self, client) -> None:
        result = client.simulate_post(
            "/v1/role-assignments",
            json={"roleType": "company", "role": "viewer", "companyId": OTHER_COMPANY},
        )
        assert result.status_code == 403
        assert OTHER_COMPANY in result.json["error"]
        assert result.json["details"]["currentRole"] is None

    @pytest.mark.parametrize(
        "body,code",
        [
            ({"role": "manager", "companyId": COMPANY_1}, "MISSING_ROLE_INFO"),
            ({"roleType": "company", "role": "manager"}, "MISSING_COMPANY_ID"),
            ({"roleType": "company", "role": "chief", "companyId": COMPANY_1}, "INVALID_ROLE"),
            ({"roleType": "company", "role": "manager", "companyId": "C1"}, "INVALID_COMPANY_ID"),
        ],
    )
    def test_bad_request(self, client, body, code) -> None:
        result = client.simulate_post("/v1/role-assignments", json=body)
        assert result.status_code == 400
        assert result.json["code"] == code

    def test_patch_without_role_fields(self, client) -> None:
        result = client.simulate_patch("/v1/role-assignments", json={"isActive": False})
        assert result.status_code == 200
        assert result.json["allowed"] is True

    def test_patch_escalation_denied(self, client) -> None:
        result = client.simulate_patch(
            "/v1/role-assignments",
            json={"roleType": "company", "role": "admin_empresa", "companyId": COMPANY_1},
        )
        assert result.status_code == 403

    def test_multi_company_restricted(self, client, fake_uow) -> None:
        fake_uow.user_roles.add("target-1", company_role(Role.EMPLOYEE, COMPANY_2))
        result = client.simulate_post(
            "/v1/role-assignments",
            json={
                "roleType": "company",
                "role": "employee",
                "companyId": COMPANY_1,
                "targetUserId": "target-1",
            },
        )
        assert result.status_code == 403
        assert result.json["code"] == "MULTI_COMPANY_RESTRICTED"
        assert result.json["details"]["currentRole"] == "admin_empresa"

    def test_patch_demotes_member_in_same_company(self, client, fake_uow) -> None:
        fake_uow.user_roles.add("target-1", company_role(Role.MANAGER, COMPANY_1))
        result = client.simulate_patch(
            "/v1/role-assignments",
            json={
                "roleType": "company",
                "role": "employee",
                "companyId": COMPANY_1,
                "targetUserId": "target-1",
            },
        )
        assert result.status_code == 200
        assert result.json == {"allowed": True, "assignerEffectiveRole": "admin_empresa"}

    def test_super_admin_bypasses_company_id_check(self, super_admin_client) -> None:
        result = super_admin_client.simulate_post(
            "/v1/role-assignments",
            json={"roleType": "company", "role": "viewer", "companyId": "C1"},
        )
        assert result.status_code == 200
        assert result.json["assignerEffectiveRole"] == "super_admin"

    def test_company_id_normalized_for_members(self, client) -> None:
        result = client.simulate_post(
            "/v1/role-assignments",
            json={"roleType": "company", "role": "manager", "companyId": COMPANY_1.replace("-", "")},
        )
        assert result.status_code == 200

    def test_super_admin_bypass(self, super_admin_client) -> None:
        result = super_admin_client.simulate_post(
            "/v1/role-assignments", json={"roleType": "global", "role": "super_admin"}
        )
        assert result.status_code == 200
        assert result.json["assignerEffectiveRole"] == "super_admin"

    def test_unauthenticated(self, anonymous_client) -> None:
        result = anonymous_client.simulate_post(
            "/v1/role-assignments",
            json={"roleType": "company", "role": "viewer", "companyId": COMPANY_1},
        )
        assert result.status_code == 401


def test_role_defaults_exposed_through_calculate(client) -> None:
    result = client.simulate_get(
        "/v1/permissions/calculate", params={"companyId": COMPANY_2, "role": "admin_empresa"}
    )
    expected = {
        p for p in default_permissions_for(Role.ADMIN_EMPRESA)
        if not p.startswith(("hrm.", "sales.", "purchases."))
    }
    assert set(result.json["permissions"]) == expected
