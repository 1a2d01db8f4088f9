"""Authentication and account endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status

from inventory_app.core.container import ApplicationContainer
from inventory_app.core.security import create_access_token, get_current_identity, require_admin
from inventory_app.interfaces.http.deps import get_account_service, get_container
from inventory_app.interfaces.http.errors import to_http_exception
from inventory_app.modules.accounts import AccountCreateInput, AccountService, AccountUpdateInput
from inventory_app.modules.common.exceptions import DomainError
from inventory_app.modules.common.identity import Identity
from inventory_app.schemas import AccountCreate, AccountResponse, AccountUpdate, LoginRequest, LoginResponse

router = APIRouter()


@router.post("/login", response_model=LoginResponse, summary="Log in with username and password")
async def login(
    payload: LoginRequest,
    account_service: AccountService = Depends(get_account_service),
    container: ApplicationContainer = Depends(get_container),
):
    account = await account_service.authenticate(payload.username, payload.password)
    if not account:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")

    await account_service.set_last_login(account.id)
    access_token = create_access_token(container.settings, account.id, account.username, account.role.value)
    return LoginResponse(
        access_token=access_token,
        account_id=account.id,
        username=account.username,
        role=account.role,
    )


@router.get("/me", response_model=AccountResponse, summary="Current account")
async def me(
    identity: Identity = Depends(get_current_identity),
    account_service: AccountService = Depends(get_account_service),
):
    try:
        account = await account_service.require(identity.id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return AccountResponse.model_validate(account)


@router.post(
    "/accounts",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account (admin)",
)
async def create_account(
    payload: AccountCreate,
    _: Identity = Depends(require_admin),
    account_service: AccountService = Depends(get_account_service),
):
    try:
        account = await account_service.create_account(
            AccountCreateInput(
                username=payload.username,
                password=payload.password,
                role=payload.role,
                email=payload.email,
            )
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return AccountResponse.model_validate(account)


@router.get("/accounts", response_model=list[AccountResponse], summary="List accounts (admin)")
async def list_accounts(
    _: Identity = Depends(require_admin),
    account_service: AccountService = Depends(get_account_service),
):
    accounts = await account_service.list_accounts()
    return [AccountResponse.model_validate(account) for account in accounts]


@router.patch("/accounts/{account_id}", response_model=AccountResponse, summary="Update an account (admin)")
async def update_account(
    account_id: str,
    payload: AccountUpdate,
    _: Identity = Depends(require_admin),
    account_service: AccountService = Depends(get_account_service),
):
    try:
        account = await account_service.update_account(
            account_id,
            AccountUpdateInput(**payload.model_dump(exclude_unset=True)),
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return AccountResponse.model_validate(account)
