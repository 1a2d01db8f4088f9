"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.db.models import Account as AccountModel
from inventory_app.modules.accounts.exceptions import AccountNotFoundError
from inventory_app.modules.accounts.models import Account
from inventory_app.modules.accounts.repository import AccountRepository
from inventory_app.modules.common.identity import Role


class SqlAccountRepository(AccountRepository):
    """Account repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, account_id: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model)

    async def get_by_username(self, username: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.username == username)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model)

    async def list_accounts(self) -> Sequence[Account]:
        stmt = select(AccountModel).order_by(AccountModel.username)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def list_by_role(self, role: Role) -> Sequence[Account]:
        stmt = (
            select(AccountModel)
            .where(AccountModel.role == role.value, AccountModel.is_active.is_(True))
            .order_by(AccountModel.username)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def create_account(
        self,
        *,
        username: str,
        password_hash: str,
        role: Role,
        email: str | None,
        is_active: bool,
        created_at: datetime,
    ) -> Account:
        model = AccountModel(
            username=username,
            password_hash=password_hash,
            role=role.value,
            email=email,
            is_active=is_active,
            created_at=created_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def update_account(
        self,
        account_id: str,
        *,
        email: str | None = None,
        is_active: bool | None = None,
        role: Role | None = None,
        password_hash: str | None = None,
        updated_at: datetime,
    ) -> Account:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            raise AccountNotFoundError(account_id)

        model.email = email
        if is_active is not None:
            model.is_active = is_active
        if role is not None:
            model.role = role.value
        if password_hash is not None:
            model.password_hash = password_hash
        model.updated_at = updated_at

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def set_last_login(self, account_id: str, timestamp: datetime) -> None:
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(last_login_at=timestamp)
        )
        await self._session.execute(stmt)

    @staticmethod
    def _to_domain(model: AccountModel | None) -> Account | None:
        if model is None:
            return None
        return Account(
            id=str(model.id),
            username=model.username,
            role=Role(model.role or Role.VIEWER.value),
            is_active=bool(model.is_active),
            password_hash=model.password_hash,
            email=model.email,
            created_at=model.created_at,
            updated_at=model.updated_at,
            last_login_at=model.last_login_at,
        )
