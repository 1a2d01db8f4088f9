"""Resolved caller identity threaded through every mutating call."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    ADMIN = "ADMIN"
    STAFF = "STAFF"
    VIEWER = "VIEWER"


@dataclass(frozen=True, slots=True)
class Identity:
    id: str
    username: str
    role: Role

    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
