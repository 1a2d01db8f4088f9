"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    text,
)
from sqlalchemy.orm import relationship

from inventory_app.infrastructure.database.base import Base

# statuses covered by the one-active-request-per-(asset, requester) index
ACTIVE_REQUEST_STATUSES = ("PENDING", "APPROVED")
_ACTIVE_REQUEST_PREDICATE = text("status IN ('PENDING', 'APPROVED')")


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="VIEWER", index=True)
    is_active = Column(Boolean, default=True)
    email = Column(String(100), unique=True)
    created_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True))
    last_login_at = Column(DateTime(timezone=True))


class AssetCategory(Base):
    __tablename__ = "asset_categories"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text)
    created_at = Column(DateTime(timezone=True))


class Asset(Base):
    __tablename__ = "assets"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), unique=True, nullable=False)
    serial_number = Column(String(100), unique=True, nullable=False)
    category_id = Column(String(36), ForeignKey("asset_categories.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="AVAILABLE", index=True)
    cost = Column(Numeric(12, 2))
    purchase_date = Column(Date)
    image_url = Column(String(255))
    current_holder_id = Column(String(36), ForeignKey("accounts.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True))

    category = relationship("AssetCategory")
    current_holder = relationship("Account")


class BorrowRequest(Base):
    __tablename__ = "borrow_requests"
    __table_args__ = (
        Index(
            "uq_borrow_requests_active_pair",
            "asset_id",
            "requester_id",
            unique=True,
            sqlite_where=_ACTIVE_REQUEST_PREDICATE,
            postgresql_where=_ACTIVE_REQUEST_PREDICATE,
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    asset_id = Column(String(36), ForeignKey("assets.id"), nullable=False, index=True)
    requester_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    note = Column(Text)
    status = Column(String(20), nullable=False, default="PENDING", index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    processed_by_id = Column(String(36), ForeignKey("accounts.id"))
    processed_at = Column(DateTime(timezone=True))
    decline_reason = Column(Text)
    completed_at = Column(DateTime(timezone=True))

    asset = relationship("Asset")
    requester = relationship("Account", foreign_keys=[requester_id])
    processed_by = relationship("Account", foreign_keys=[processed_by_id])


class AssetTransaction(Base):
    __tablename__ = "asset_transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # no foreign key: ledger history outlives a hard-deleted asset
    asset_id = Column(String(36), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    action = Column(String(20), nullable=False)
    transaction_date = Column(DateTime(timezone=True), nullable=False)
    notes = Column(String(500))


class AuditEntry(Base):
    __tablename__ = "audit_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    entity_name = Column(String(100), nullable=False)
    entity_id = Column(String(36), nullable=False)
    action_type = Column(String(50), nullable=False, index=True)
    old_value = Column(Text)
    new_value = Column(Text)
    performed_by = Column(String(100), nullable=False, index=True)
    performed_at = Column(DateTime(timezone=True), nullable=False)


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    recipient_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    recipient = relationship("Account")
