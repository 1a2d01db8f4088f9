"""Pydantic schemas used across the project."""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from inventory_app.modules.assets.models import AssetStatus
from inventory_app.modules.borrowing.models import RequestStatus
from inventory_app.modules.common.identity import Role
from inventory_app.modules.ledger.models import TransactionAction


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    account_id: str
    username: str
    role: Role


class TokenData(BaseModel):
    account_id: str
    username: str
    role: str


class AccountCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)
    role: Role = Role.VIEWER
    email: Optional[str] = None


class AccountUpdate(BaseModel):
    """Partial update; only fields present in the request body are applied."""

    email: Optional[str] = None
    is_active: Optional[bool] = None
    role: Optional[Role] = None
    password: Optional[str] = Field(default=None, min_length=6)


class AccountResponse(BaseModel):
    id: str
    username: str
    role: Role
    is_active: bool
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AssetCreate(BaseModel):
    name: str
    serial_number: str
    category_id: str
    status: AssetStatus = AssetStatus.AVAILABLE
    cost: Optional[Decimal] = None
    purchase_date: Optional[date] = None
    image_url: Optional[str] = None


class AssetUpdate(BaseModel):
    """Partial update; only fields present in the request body are applied."""

    name: Optional[str] = None
    serial_number: Optional[str] = None
    category_id: Optional[str] = None
    status: Optional[AssetStatus] = None
    cost: Optional[Decimal] = None
    purchase_date: Optional[date] = None
    image_url: Optional[str] = None


class BorrowerResponse(BaseModel):
    id: str
    username: str

    model_config = ConfigDict(from_attributes=True)


class AssetResponse(BaseModel):
    id: str
    name: str
    serial_number: str
    category_id: str
    status: AssetStatus
    cost: Optional[float] = None
    purchase_date: Optional[date] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    borrowed_by: Optional[BorrowerResponse] = None

    model_config = ConfigDict(from_attributes=True)


class AssetListResponse(BaseModel):
    total: int
    items: list[AssetResponse]


class BorrowRequestCreate(BaseModel):
    asset_id: str
    note: Optional[str] = Field(default=None, max_length=1000)


class BorrowDecision(BaseModel):
    reason: Optional[str] = Field(default=None, max_length=1000)


class BorrowRequestResponse(BaseModel):
    id: str
    asset_id: str
    requester_id: str
    status: RequestStatus
    note: Optional[str] = None
    created_at: datetime
    processed_by_id: Optional[str] = None
    processed_at: Optional[datetime] = None
    decline_reason: Optional[str] = None
    completed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class DuplicateCheckResponse(BaseModel):
    asset_id: str
    exists: bool


class TransactionResponse(BaseModel):
    id: int
    asset_id: str
    user_id: str
    action: TransactionAction
    transaction_date: datetime
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AuditEntryResponse(BaseModel):
    id: int
    entity_name: str
    entity_id: str
    action_type: str
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    performed_by: str
    performed_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotificationResponse(BaseModel):
    id: str
    recipient_id: str
    message: str
    is_read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UnreadCountResponse(BaseModel):
    unread: int


class AssetSummaryResponse(BaseModel):
    total: int
    by_status: dict[str, int]
    by_category: dict[str, int]

    model_config = ConfigDict(from_attributes=True)


class DashboardResponse(BaseModel):
    total_assets: int
    total_users: int
    total_transactions: int
    recent_audits: list[AuditEntryResponse]

    model_config = ConfigDict(from_attributes=True)
