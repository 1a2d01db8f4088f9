"""Asset registry endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.security import get_current_identity, require_admin
from inventory_app.interfaces.http.deps import get_asset_registry, get_db_session
from inventory_app.interfaces.http.errors import to_http_exception
from inventory_app.modules.assets import AssetCreateInput, AssetRegistry, AssetStatus, AssetUpdateInput
from inventory_app.modules.common.exceptions import DomainError
from inventory_app.modules.common.identity import Identity
from inventory_app.schemas import AssetCreate, AssetListResponse, AssetResponse, AssetUpdate, BorrowerResponse

router = APIRouter()


def _to_schema(asset) -> AssetResponse:
    return AssetResponse.model_validate(asset)


@router.get("/", response_model=AssetListResponse, summary="List assets")
async def list_assets(
    status_filter: Optional[AssetStatus] = Query(default=None, alias="status"),
    category_id: Optional[str] = None,
    search: Optional[str] = None,
    limit: int = Query(default=20, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    _: Identity = Depends(get_current_identity),
    registry: AssetRegistry = Depends(get_asset_registry),
):
    page = await registry.list_assets(
        status=status_filter,
        category_id=category_id,
        search=search,
        limit=limit,
        offset=offset,
    )
    return AssetListResponse(total=page.total, items=[_to_schema(asset) for asset in page.items])


@router.post("/", response_model=AssetResponse, status_code=status.HTTP_201_CREATED, summary="Register an asset")
async def create_asset(
    payload: AssetCreate,
    identity: Identity = Depends(require_admin),
    registry: AssetRegistry = Depends(get_asset_registry),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        asset = await registry.create(identity, AssetCreateInput(**payload.model_dump()))
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    await db.commit()
    return _to_schema(asset)


@router.get("/{asset_id}", response_model=AssetResponse, summary="Asset detail")
async def get_asset(
    asset_id: str,
    _: Identity = Depends(get_current_identity),
    registry: AssetRegistry = Depends(get_asset_registry),
):
    try:
        asset = await registry.get(asset_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _to_schema(asset)


@router.get("/{asset_id}/borrower", response_model=Optional[BorrowerResponse], summary="Current holder of an asset")
async def get_current_borrower(
    asset_id: str,
    _: Identity = Depends(get_current_identity),
    registry: AssetRegistry = Depends(get_asset_registry),
):
    try:
        borrower = await registry.current_borrower(asset_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return BorrowerResponse.model_validate(borrower) if borrower else None


@router.put("/{asset_id}", response_model=AssetResponse, summary="Update an asset")
async def update_asset(
    asset_id: str,
    payload: AssetUpdate,
    identity: Identity = Depends(require_admin),
    registry: AssetRegistry = Depends(get_asset_registry),
    db: AsyncSession = Depends(get_db_session),
):
    changes = payload.model_dump(exclude_unset=True)
    try:
        asset = await registry.update(identity, asset_id, AssetUpdateInput(**changes))
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    await db.commit()
    return _to_schema(asset)


@router.post("/{asset_id}/retire", response_model=AssetResponse, summary="Retire an asset (keeps the record)")
async def retire_asset(
    asset_id: str,
    identity: Identity = Depends(require_admin),
    registry: AssetRegistry = Depends(get_asset_registry),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        asset = await registry.soft_retire(identity, asset_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    await db.commit()
    return _to_schema(asset)


@router.delete("/{asset_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Permanently delete an asset")
async def delete_asset(
    asset_id: str,
    identity: Identity = Depends(require_admin),
    registry: AssetRegistry = Depends(get_asset_registry),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        await registry.hard_delete(identity, asset_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
