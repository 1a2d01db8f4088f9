"""Domain services for account management."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.crypto import hash_password, verify_password
from inventory_app.infrastructure.database.repositories.account_repository import SqlAccountRepository
from inventory_app.modules.common.exceptions import ValidationError
from inventory_app.modules.common.identity import Role
from inventory_app.modules.common.utils import parse_enum, utcnow

from .exceptions import AccountAlreadyExistsError, AccountNotFoundError
from .models import Account, AccountCreateInput, AccountUpdateInput, UNSET
from .repository import AccountRepository


class AccountService:
    """Encapsulates core account use cases."""

    def __init__(self, repository: AccountRepository, *, bcrypt_rounds: int | None = None) -> None:
        self._repository = repository
        self._bcrypt_rounds = bcrypt_rounds

    @classmethod
    def with_session(cls, session: AsyncSession, *, bcrypt_rounds: int | None = None) -> "AccountService":
        return cls(SqlAccountRepository(session), bcrypt_rounds=bcrypt_rounds)

    async def get_by_id(self, account_id: str) -> Account | None:
        return await self._repository.get_by_id(account_id)

    async def require(self, account_id: str) -> Account:
        account = await self._repository.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def get_by_username(self, username: str) -> Account | None:
        return await self._repository.get_by_username(username)

    async def list_accounts(self) -> Sequence[Account]:
        return await self._repository.list_accounts()

    async def list_by_role(self, role: Role | str) -> Sequence[Account]:
        return await self._repository.list_by_role(parse_enum(Role, role, ValidationError))

    async def authenticate(self, username: str, password: str) -> Account | None:
        account = await self._repository.get_by_username(username)
        if account is None or not account.is_active:
            return None
        if not verify_password(password, account.password_hash):
            return None
        return account

    async def create_account(self, payload: AccountCreateInput) -> Account:
        existing = await self._repository.get_by_username(payload.username)
        if existing is not None:
            raise AccountAlreadyExistsError(f"username already exists: {payload.username}")

        password_hash = hash_password(payload.password, rounds=self._bcrypt_rounds)
        return await self._repository.create_account(
            username=payload.username,
            password_hash=password_hash,
            role=parse_enum(Role, payload.role, ValidationError),
            email=payload.email,
            is_active=payload.is_active,
            created_at=utcnow(),
        )

    async def update_account(self, account_id: str, payload: AccountUpdateInput) -> Account:
        current = await self._repository.get_by_id(account_id)
        if current is None:
            raise AccountNotFoundError(account_id)

        password_hash = None
        if payload.password is not UNSET and payload.password is not None:
            password_hash = hash_password(payload.password, rounds=self._bcrypt_rounds)

        email = payload.email if payload.email is not UNSET else current.email
        is_active = payload.is_active if payload.is_active is not UNSET else current.is_active
        role = (
            parse_enum(Role, payload.role, ValidationError)
            if payload.role is not UNSET and payload.role is not None
            else current.role
        )

        return await self._repository.update_account(
            account_id,
            email=email,
            is_active=is_active,
            role=role,
            password_hash=password_hash,
            updated_at=utcnow(),
        )

    async def set_last_login(self, account_id: str) -> None:
        await self._repository.set_last_login(account_id, utcnow())
