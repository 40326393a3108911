"""Plan and plan feature set."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from erpaccess.domain.exceptions import ValidationError
from erpaccess.domain.value_objects import FeatureKey


@dataclass(frozen=True)
class PlanFeatureSet:
    """Which plan modules are enabled. Every FeatureKey not enabled is disabled."""

    enabled: frozenset[FeatureKey] = frozenset()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PlanFeatureSet":
        """Build from raw feature flags.

        Keys outside the catalog are ignored and missing keys count as disabled.
        A value that is not a boolean raises ValidationError.
        """
        enabled: set[FeatureKey] = set()
        for key, value in data.items():
            if not isinstance(value, bool):
                raise ValidationError(
                    f"Feature '{key}' must be a boolean, got {type(value).__name__}",
                    code="INVALID_FEATURE_VALUE",
                )
            try:
                feature = FeatureKey(key)
            except ValueError:
                continue
            if value:
                enabled.add(feature)
        return cls(enabled=frozenset(enabled))

    @classmethod
    def of(cls, features: Iterable[FeatureKey]) -> "PlanFeatureSet":
        return cls(enabled=frozenset(features))

    def is_enabled(self, feature: FeatureKey) -> bool:
        return feature in self.enabled

    def as_dict(self) -> dict[str, bool]:
        return {key.value: key in self.enabled for key in FeatureKey}


@dataclass
class Plan:
    """Subscription plan - named tier with its feature flags."""

    id: str
    name: str
    type: str
    features: PlanFeatureSet


@dataclass
class Company:
    """Tenant. settings_features is the fallback when no plan is linked."""

    id: str
    name: str
    plan_id: str | None = None
    settings_features: PlanFeatureSet | None = None
