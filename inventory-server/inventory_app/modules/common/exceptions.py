"""Error kinds shared by every domain module.

Domain modules subclass these so the HTTP layer can map a whole family of
failures to one status code without knowing every concrete error.
"""


class DomainError(Exception):
    """Base class for domain errors."""


class NotFoundError(DomainError):
    """Raised when a referenced asset, user, request or record is absent."""


class ConflictError(DomainError):
    """Raised on uniqueness violations and failed state-transition guards."""


class ForbiddenError(DomainError):
    """Raised when the caller may not act on the target entity."""


class ValidationError(DomainError):
    """Raised when a caller supplies a malformed status or action value."""
