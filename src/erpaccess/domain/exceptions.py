"""Domain exceptions."""


class ErpAccessError(Exception):
    """Base exception for ERP Access."""

    pass


class ValidationError(ErpAccessError):
    """Validation failed for input data (missing or malformed field)."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR") -> None:
        super().__init__(message)
        self.code = code


class AuthorizationDenied(ErpAccessError):
    """Acting user may not perform the requested role assignment."""

    def __init__(
        self,
        reason: str,
        current_role: str | None = None,
        attempted_role: str | None = None,
        company_id: str | None = None,
        code: str = "INSUFFICIENT_ROLE_PRIVILEGES",
    ) -> None:
        super().__init__(reason)
        self.reason = reason
        self.code = code
        self.current_role = current_role
        self.attempted_role = attempted_role
        self.company_id = company_id


class NotFound(ErpAccessError):
    """Requested resource was not found."""

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class InfrastructureFailure(ErpAccessError):
    """A collaborator (database, identity provider) could not be reached."""

    pass
