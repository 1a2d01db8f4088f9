"""Service dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.container import ApplicationContainer
from inventory_app.modules.accounts.service import AccountService
from inventory_app.modules.assets import AssetRegistry
from inventory_app.modules.borrowing import BorrowWorkflowEngine

from .database import get_container, get_db_session


def get_account_service(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_container),
) -> AccountService:
    return AccountService.with_session(db, bcrypt_rounds=container.settings.security.bcrypt_rounds)


def get_asset_registry(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_container),
) -> AssetRegistry:
    return AssetRegistry.with_session(db, container.settings)


def get_workflow_engine(container: ApplicationContainer = Depends(get_container)) -> BorrowWorkflowEngine:
    return container.workflow_engine()


__all__ = ["get_account_service", "get_asset_registry", "get_workflow_engine"]
