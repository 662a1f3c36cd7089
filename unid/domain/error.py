"""Domain layer errors.

Every error carries a stable ``kind`` so callers can tell failures apart
without parsing messages.
"""


class DomainError(Exception):
    """Base domain error."""

    kind = "domain"


class ValidationError(DomainError):
    """Domain validation error."""

    kind = "validation"


class InvalidClaimError(DomainError):
    """Raised when a token cannot be verified or resolves to no identity."""

    kind = "invalid_claim"

    def __init__(self, message: str = "Invalid identity claim"):
        super().__init__(message)


class UnauthorizedError(DomainError):
    """Raised when a caller acts on identities it does not control."""

    kind = "unauthorized"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Unauthorized: {reason}")


class SameIdentityError(DomainError):
    """Raised when both sides of a merge are the same identity."""

    kind = "same_identity"

    def __init__(self, universal_id: str):
        self.universal_id = universal_id
        super().__init__(f"Cannot merge identity {universal_id} with itself")


class ConflictError(DomainError):
    """Raised when a unique resource is already claimed by another identity."""

    kind = "conflict"

    def __init__(self, subject: str, message: str | None = None):
        self.subject = subject
        super().__init__(message or f"This {subject} is already bound to another identity")


class LastMethodError(DomainError):
    """Raised when removing a binding would leave an identity unreachable."""

    kind = "last_method"

    def __init__(self, universal_id: str):
        self.universal_id = universal_id
        super().__init__(
            "Cannot remove the only login method; bind another method first"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class AuthFailedError(DomainError):
    """Raised when a login attempt cannot be resolved to an identity."""

    kind = "auth_failed"

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)
