"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Input rejected before anything was persisted.

    Carries per-field messages so the interface layer can report them.
    """

    def __init__(self, field_errors: dict[str, str]):
        self.field_errors = field_errors
        details = "; ".join(f"{field}: {msg}" for field, msg in field_errors.items())
        super().__init__(f"Validation failed: {details}")


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class ReplyNotAllowedError(BusinessRuleViolationError):
    """Raised when a reply targets a comment that cannot receive replies."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
