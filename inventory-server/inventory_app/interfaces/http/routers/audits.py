"""Read-only audit trail endpoints (admin)."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.container import ApplicationContainer
from inventory_app.core.security import require_admin
from inventory_app.interfaces.http.deps import get_container, get_db_session
from inventory_app.modules.audit import AuditTrail
from inventory_app.modules.common.identity import Identity
from inventory_app.schemas import AuditEntryResponse

router = APIRouter()


def _trail(db: AsyncSession, container: ApplicationContainer) -> AuditTrail:
    return AuditTrail.with_session(db, container.settings)


@router.get("/", response_model=list[AuditEntryResponse], summary="Most recent audit entries")
async def recent_entries(
    limit: int = Query(default=20, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    _: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_container),
):
    entries = await _trail(db, container).recent(limit=limit, offset=offset)
    return [AuditEntryResponse.model_validate(entry) for entry in entries]


@router.get("/performer/{username}", response_model=list[AuditEntryResponse], summary="Entries by performer")
async def entries_by_performer(
    username: str,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    _: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_container),
):
    entries = await _trail(db, container).by_performer(username, limit=limit, offset=offset)
    return [AuditEntryResponse.model_validate(entry) for entry in entries]


@router.get("/action/{action_type}", response_model=list[AuditEntryResponse], summary="Entries by action type")
async def entries_by_action(
    action_type: str,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    _: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_container),
):
    entries = await _trail(db, container).by_action_type(action_type, limit=limit, offset=offset)
    return [AuditEntryResponse.model_validate(entry) for entry in entries]
