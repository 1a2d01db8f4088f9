"""JWT helpers and identity dependencies."""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from inventory_app.core.config import Settings
from inventory_app.core.container import ApplicationContainer
from inventory_app.interfaces.http.deps.database import get_container
from inventory_app.modules.accounts.service import AccountService
from inventory_app.modules.common.identity import Identity, Role
from inventory_app.schemas import TokenData

security = HTTPBearer()


def create_access_token(
    settings: Settings,
    account_id: str,
    username: str,
    role: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    expire_delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": account_id,
        "username": username,
        "role": role,
        "exp": datetime.now(timezone.utc) + expire_delta,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(settings: Settings, token: str) -> TokenData:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials") from exc

    account_id = payload.get("sub")
    username = payload.get("username")
    role = payload.get("role")
    if not all([account_id, username, role]):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials")
    return TokenData(account_id=account_id, username=username, role=role)


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    container: ApplicationContainer = Depends(get_container),
) -> Identity:
    token_data = decode_access_token(container.settings, credentials.credentials)
    # short-lived session: the lookup must not hold a transaction open for the request
    async with container.session_factory() as session:
        account = await AccountService.with_session(session).get_by_id(token_data.account_id)
    if account is None or not account.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account missing or disabled")
    return account.identity()


async def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    if identity.role != Role.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Administrator role required")
    return identity
