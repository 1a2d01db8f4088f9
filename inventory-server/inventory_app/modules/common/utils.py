"""Small helpers shared by the domain services."""

from __future__ import annotations

import dataclasses
import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, TypeVar

EnumT = TypeVar("EnumT", bound=Enum)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_enum(enum_cls: type[EnumT], value: Any, error_cls: type[Exception]) -> EnumT:
    """Coerce ``value`` into ``enum_cls`` or raise ``error_cls``."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().upper())
    except ValueError as exc:
        raise error_cls(f"invalid {enum_cls.__name__}: {value!r}") from exc


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def snapshot(value: Any) -> str | None:
    """Serialize a domain object for audit old/new value columns."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = dataclasses.asdict(value)
    return json.dumps(value, ensure_ascii=False, default=_json_default, sort_keys=True)
