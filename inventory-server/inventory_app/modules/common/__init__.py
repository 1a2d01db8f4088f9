"""Shared domain primitives: error kinds and caller identity."""

from .exceptions import ConflictError, DomainError, ForbiddenError, NotFoundError, ValidationError
from .identity import Identity, Role

__all__ = [
    "ConflictError",
    "DomainError",
    "ForbiddenError",
    "Identity",
    "NotFoundError",
    "Role",
    "ValidationError",
]
