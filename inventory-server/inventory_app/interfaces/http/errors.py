"""Translate domain error kinds into HTTP responses."""

from fastapi import HTTPException, status

from inventory_app.modules.common.exceptions import (
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)

_STATUS_BY_KIND = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (ValidationError, 422),
)


def to_http_exception(exc: DomainError) -> HTTPException:
    for kind, status_code in _STATUS_BY_KIND:
        if isinstance(exc, kind):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
