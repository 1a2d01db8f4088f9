"""Asset category endpoints."""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.security import get_current_identity, require_admin
from inventory_app.interfaces.http.deps import get_asset_registry, get_db_session
from inventory_app.interfaces.http.errors import to_http_exception
from inventory_app.modules.assets import AssetRegistry
from inventory_app.modules.categories import CategoryService
from inventory_app.modules.common.exceptions import DomainError
from inventory_app.modules.common.identity import Identity
from inventory_app.schemas import AssetResponse, CategoryCreate, CategoryResponse

router = APIRouter()


@router.get("/", response_model=list[CategoryResponse], summary="List categories")
async def list_categories(
    _: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    categories = await CategoryService.with_session(db).list_categories()
    return [CategoryResponse.model_validate(category) for category in categories]


@router.post("/", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED, summary="Create a category")
async def create_category(
    payload: CategoryCreate,
    _: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        category = await CategoryService.with_session(db).create(name=payload.name, description=payload.description)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    await db.commit()
    return CategoryResponse.model_validate(category)


@router.get("/{category_id}", response_model=CategoryResponse, summary="Category detail")
async def get_category(
    category_id: str,
    _: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        category = await CategoryService.with_session(db).get(category_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return CategoryResponse.model_validate(category)


@router.get("/{category_id}/assets", response_model=list[AssetResponse], summary="Assets in a category")
async def list_category_assets(
    category_id: str,
    _: Identity = Depends(get_current_identity),
    registry: AssetRegistry = Depends(get_asset_registry),
):
    assets = await registry.find_assets_by_category(category_id)
    return [AssetResponse.model_validate(asset) for asset in assets]


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an unused category")
async def delete_category(
    category_id: str,
    _: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        await CategoryService.with_session(db).delete(category_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
