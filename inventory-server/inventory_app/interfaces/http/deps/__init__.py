"""Reusable FastAPI dependencies."""

from .database import get_container, get_db_session
from .services import get_account_service, get_asset_registry, get_workflow_engine

__all__ = [
    "get_account_service",
    "get_asset_registry",
    "get_container",
    "get_db_session",
    "get_workflow_engine",
]
