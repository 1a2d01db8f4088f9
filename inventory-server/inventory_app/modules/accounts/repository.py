"""Repository protocol for accounts."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from inventory_app.modules.common.identity import Role

from .models import Account


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence."""

    async def get_by_id(self, account_id: str) -> Account | None:
        ...

    async def get_by_username(self, username: str) -> Account | None:
        ...

    async def list_accounts(self) -> Sequence[Account]:
        ...

    async def list_by_role(self, role: Role) -> Sequence[Account]:
        ...

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
        ...

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
        ...

    async def set_last_login(self, account_id: str, timestamp: datetime) -> None:
        ...
