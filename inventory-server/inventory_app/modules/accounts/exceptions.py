"""Account domain specific exceptions."""

from inventory_app.modules.common.exceptions import ConflictError, DomainError, NotFoundError


class AccountError(DomainError):
    """Base class for account domain errors."""


class AccountAlreadyExistsError(AccountError, ConflictError):
    """Raised when attempting to create an account with duplicate username or email."""


class AccountNotFoundError(AccountError, NotFoundError):
    """Raised when the requested account cannot be found."""

    def __init__(self, account_id: str) -> None:
        super().__init__(f"user not found: {account_id}")
        self.account_id = account_id
