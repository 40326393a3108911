"""Permission resolution DTOs."""

from dataclasses import dataclass, field

from erpaccess.domain.value_objects import FeatureKey

NO_PLAN_NAME = "Sin plan"
NO_PLAN_TYPE = "unknown"
CUSTOM_PLAN_NAME = "Plan Personalizado"
CUSTOM_PLAN_TYPE = "custom"

MINIMAL_PERMISSIONS: frozenset[str] = frozenset({"settings.view", "company.edit"})


@dataclass(frozen=True)
class EffectivePermissionResult:
    """Permissions a role actually has in a company, computed per request."""

    permissions: frozenset[str]
    available_modules: list[FeatureKey] = field(default_factory=list)
    restricted_modules: list[FeatureKey] = field(default_factory=list)
    plan_name: str = NO_PLAN_NAME
    plan_type: str = NO_PLAN_TYPE

    @classmethod
    def minimal(cls) -> "EffectivePermissionResult":
        """Safe result used when no plan or feature data is available."""
        return cls(permissions=MINIMAL_PERMISSIONS)

    @property
    def degraded(self) -> bool:
        """True for the no-plan result; a resolved plan always lists every module."""
        return not self.available_modules and not self.restricted_modules


@dataclass(frozen=True)
class PermissionValidationResult:
    """Outcome of checking a requested permission list."""

    valid: bool
    invalid_permissions: list[str]
