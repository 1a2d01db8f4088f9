"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from inventory_app.modules.common.identity import Identity, Role


@dataclass(slots=True)
class Account:
    id: str
    username: str
    role: Role
    is_active: bool
    password_hash: str = field(repr=False)
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def identity(self) -> Identity:
        return Identity(id=self.id, username=self.username, role=self.role)


@dataclass(slots=True)
class AccountCreateInput:
    username: str
    password: str
    role: Role = Role.VIEWER
    email: Optional[str] = None
    is_active: bool = True


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class AccountUpdateInput:
    email: Optional[str] | object = UNSET
    is_active: Optional[bool] | object = UNSET
    role: Optional[Role] | object = UNSET
    password: Optional[str] | object = UNSET
