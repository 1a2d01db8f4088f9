"""Account domain services and models."""

from .models import Account, AccountCreateInput, AccountUpdateInput, UNSET
from .service import AccountService
from .exceptions import (
    AccountError,
    AccountAlreadyExistsError,
    AccountNotFoundError,
)

__all__ = [
    "Account",
    "AccountCreateInput",
    "AccountUpdateInput",
    "AccountService",
    "AccountError",
    "AccountAlreadyExistsError",
    "AccountNotFoundError",
    "UNSET",
]
