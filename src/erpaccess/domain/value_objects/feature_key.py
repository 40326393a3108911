"""Subscription plan feature keys."""

from enum import StrEnum

from erpaccess.domain.exceptions import ValidationError


class FeatureKey(StrEnum):
    """Modules a subscription plan can enable or disable."""

    INVENTORY_MANAGEMENT = "inventoryManagement"
    ACCOUNTING = "accounting"
    HRM = "hrm"
    CRM = "crm"
    PROJECT_MANAGEMENT = "projectManagement"
    REPORTS = "reports"
    MULTI_CURRENCY = "multiCurrency"
    API_ACCESS = "apiAccess"
    CUSTOM_BRANDING = "customBranding"
    PRIORITY_SUPPORT = "prioritySupport"
    ADVANCED_ANALYTICS = "advancedAnalytics"
    AUDIT_LOG = "auditLog"
    CUSTOM_INTEGRATIONS = "customIntegrations"
    DEDICATED_ACCOUNT = "dedicatedAccount"


def parse_feature_key(raw: object) -> FeatureKey:
    """Map a raw module name to a FeatureKey."""
    if isinstance(raw, FeatureKey):
        return raw
    try:
        return FeatureKey(raw)
    except ValueError:
        raise ValidationError(f"Unknown module '{raw}'", code="INVALID_MODULE") from None
