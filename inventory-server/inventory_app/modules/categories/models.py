"""Domain model for asset categories."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class Category:
    id: str
    name: str
    description: Optional[str]
    created_at: Optional[datetime]
