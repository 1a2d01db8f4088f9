"""Asset transaction ledger endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.security import get_current_identity, require_admin
from inventory_app.interfaces.http.deps import get_db_session
from inventory_app.interfaces.http.errors import to_http_exception
from inventory_app.modules.common.exceptions import DomainError
from inventory_app.modules.common.identity import Identity
from inventory_app.modules.ledger import TransactionAction, TransactionLedger
from inventory_app.schemas import TransactionResponse

router = APIRouter()


@router.get("/", response_model=list[TransactionResponse], summary="Search the ledger (newest first)")
async def search_transactions(
    asset_id: Optional[str] = None,
    user_id: Optional[str] = None,
    action: Optional[TransactionAction] = None,
    limit: int = Query(default=20, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    _: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
):
    records = await TransactionLedger.with_session(db).search(
        asset_id=asset_id,
        user_id=user_id,
        action=action,
        limit=limit,
        offset=offset,
    )
    return [TransactionResponse.model_validate(record) for record in records]


@router.get("/asset/{asset_id}", response_model=list[TransactionResponse], summary="History of one asset")
async def list_asset_transactions(
    asset_id: str,
    _: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    records = await TransactionLedger.with_session(db).list_for_asset(asset_id)
    return [TransactionResponse.model_validate(record) for record in records]


@router.get("/user/{user_id}", response_model=list[TransactionResponse], summary="Transactions by one user")
async def list_user_transactions(
    user_id: str,
    _: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
):
    records = await TransactionLedger.with_session(db).list_for_user(user_id)
    return [TransactionResponse.model_validate(record) for record in records]


@router.get("/{record_id}", response_model=TransactionResponse, summary="Ledger entry detail")
async def get_transaction(
    record_id: int,
    _: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        record = await TransactionLedger.with_session(db).get(record_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return TransactionResponse.model_validate(record)
