"""Borrow request workflow endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Query, status

from inventory_app.core.security import get_current_identity, require_admin
from inventory_app.interfaces.http.deps import get_workflow_engine
from inventory_app.interfaces.http.errors import to_http_exception
from inventory_app.modules.borrowing import BorrowWorkflowEngine, RequestStatus
from inventory_app.modules.common.exceptions import DomainError
from inventory_app.modules.common.identity import Identity
from inventory_app.schemas import (
    BorrowDecision,
    BorrowRequestCreate,
    BorrowRequestResponse,
    DuplicateCheckResponse,
)

router = APIRouter()


def _to_schema(request) -> BorrowRequestResponse:
    return BorrowRequestResponse.model_validate(request)


@router.post(
    "/",
    response_model=BorrowRequestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request to borrow an asset",
)
async def create_borrow_request(
    payload: BorrowRequestCreate,
    identity: Identity = Depends(get_current_identity),
    engine: BorrowWorkflowEngine = Depends(get_workflow_engine),
):
    try:
        request = await engine.create(identity, payload.asset_id, payload.note)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _to_schema(request)


@router.get("/check", response_model=DuplicateCheckResponse, summary="Does the caller already have an active request")
async def check_active_request(
    asset_id: str,
    identity: Identity = Depends(get_current_identity),
    engine: BorrowWorkflowEngine = Depends(get_workflow_engine),
):
    exists = await engine.has_active_or_pending(identity.id, asset_id)
    return DuplicateCheckResponse(asset_id=asset_id, exists=exists)


@router.get("/my", response_model=list[BorrowRequestResponse], summary="Requests owned by the caller")
async def list_my_requests(
    identity: Identity = Depends(get_current_identity),
    engine: BorrowWorkflowEngine = Depends(get_workflow_engine),
):
    return [_to_schema(request) for request in await engine.list_by_requester(identity.id)]


@router.get("/", response_model=list[BorrowRequestResponse], summary="Requests by status (admin)")
async def list_requests(
    status_filter: RequestStatus = Query(default=RequestStatus.PENDING, alias="status"),
    _: Identity = Depends(require_admin),
    engine: BorrowWorkflowEngine = Depends(get_workflow_engine),
):
    return [_to_schema(request) for request in await engine.list_by_status(status_filter)]


@router.get("/{request_id}", response_model=BorrowRequestResponse, summary="Borrow request detail")
async def get_borrow_request(
    request_id: str,
    identity: Identity = Depends(get_current_identity),
    engine: BorrowWorkflowEngine = Depends(get_workflow_engine),
):
    try:
        request = await engine.get(request_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    if request.requester_id != identity.id and not identity.is_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not your borrow request")
    return _to_schema(request)


@router.post("/{request_id}/approve", response_model=BorrowRequestResponse, summary="Approve a pending request")
async def approve_request(
    request_id: str,
    identity: Identity = Depends(require_admin),
    engine: BorrowWorkflowEngine = Depends(get_workflow_engine),
):
    try:
        request = await engine.approve(request_id, identity)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _to_schema(request)


@router.post("/{request_id}/decline", response_model=BorrowRequestResponse, summary="Decline a pending request")
async def decline_request(
    request_id: str,
    payload: BorrowDecision,
    identity: Identity = Depends(require_admin),
    engine: BorrowWorkflowEngine = Depends(get_workflow_engine),
):
    try:
        request = await engine.decline(request_id, identity, payload.reason)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _to_schema(request)


@router.post("/{request_id}/cancel", response_model=BorrowRequestResponse, summary="Cancel your pending request")
async def cancel_request(
    request_id: str,
    identity: Identity = Depends(get_current_identity),
    engine: BorrowWorkflowEngine = Depends(get_workflow_engine),
):
    try:
        request = await engine.cancel_by_requester(request_id, identity)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _to_schema(request)


@router.post("/{request_id}/complete", response_model=BorrowRequestResponse, summary="Return a borrowed asset")
async def complete_request(
    request_id: str,
    identity: Identity = Depends(get_current_identity),
    engine: BorrowWorkflowEngine = Depends(get_workflow_engine),
):
    try:
        request = await engine.complete_by_requester(request_id, identity)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _to_schema(request)
