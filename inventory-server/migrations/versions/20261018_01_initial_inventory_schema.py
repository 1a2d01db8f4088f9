"""initial inventory schema

Revision ID: 5c1e0f3a9b27
Revises: 
Create Date: 2026-10-18 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5c1e0f3a9b27"
down_revision = None
branch_labels = None
depends_on = None

ACTIVE_REQUEST_PREDICATE = sa.text("status IN ('PENDING', 'APPROVED')")


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("username", sa.String(length=50), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="VIEWER"),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true()),
        sa.Column("email", sa.String(length=100), unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True)),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.Column("last_login_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_accounts_username", "accounts", ["username"])
    op.create_index("ix_accounts_role", "accounts", ["role"])

    op.create_table(
        "asset_categories",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
        sa.Column("description", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True)),
    )

    op.create_table(
        "assets",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
        sa.Column("serial_number", sa.String(length=100), nullable=False, unique=True),
        sa.Column("category_id", sa.String(length=36), sa.ForeignKey("asset_categories.id"), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="AVAILABLE"),
        sa.Column("cost", sa.Numeric(12, 2)),
        sa.Column("purchase_date", sa.Date()),
        sa.Column("image_url", sa.String(length=255)),
        sa.Column("current_holder_id", sa.String(length=36), sa.ForeignKey("accounts.id")),
        sa.Column("created_at", sa.DateTime(timezone=True)),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_assets_category_id", "assets", ["category_id"])
    op.create_index("ix_assets_status", "assets", ["status"])
    op.create_index("ix_assets_current_holder_id", "assets", ["current_holder_id"])

    op.create_table(
        "borrow_requests",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("asset_id", sa.String(length=36), sa.ForeignKey("assets.id"), nullable=False),
        sa.Column("requester_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("note", sa.Text()),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="PENDING"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("processed_by_id", sa.String(length=36), sa.ForeignKey("accounts.id")),
        sa.Column("processed_at", sa.DateTime(timezone=True)),
        sa.Column("decline_reason", sa.Text()),
        sa.Column("completed_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_borrow_requests_asset_id", "borrow_requests", ["asset_id"])
    op.create_index("ix_borrow_requests_requester_id", "borrow_requests", ["requester_id"])
    op.create_index("ix_borrow_requests_status", "borrow_requests", ["status"])
    op.create_index(
        "uq_borrow_requests_active_pair",
        "borrow_requests",
        ["asset_id", "requester_id"],
        unique=True,
        sqlite_where=ACTIVE_REQUEST_PREDICATE,
        postgresql_where=ACTIVE_REQUEST_PREDICATE,
    )

    op.create_table(
        "asset_transactions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("asset_id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("action", sa.String(length=20), nullable=False),
        sa.Column("transaction_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("notes", sa.String(length=500)),
    )
    op.create_index("ix_asset_transactions_asset_id", "asset_transactions", ["asset_id"])
    op.create_index("ix_asset_transactions_user_id", "asset_transactions", ["user_id"])

    op.create_table(
        "audit_entries",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("entity_name", sa.String(length=100), nullable=False),
        sa.Column("entity_id", sa.String(length=36), nullable=False),
        sa.Column("action_type", sa.String(length=50), nullable=False),
        sa.Column("old_value", sa.Text()),
        sa.Column("new_value", sa.Text()),
        sa.Column("performed_by", sa.String(length=100), nullable=False),
        sa.Column("performed_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_audit_entries_action_type", "audit_entries", ["action_type"])
    op.create_index("ix_audit_entries_performed_by", "audit_entries", ["performed_by"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("recipient_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_notifications_recipient_id", "notifications", ["recipient_id"])


def downgrade() -> None:
    op.drop_index("ix_notifications_recipient_id", table_name="notifications")
    op.drop_table("notifications")
    op.drop_index("ix_audit_entries_performed_by", table_name="audit_entries")
    op.drop_index("ix_audit_entries_action_type", table_name="audit_entries")
    op.drop_table("audit_entries")
    op.drop_index("ix_asset_transactions_user_id", table_name="asset_transactions")
    op.drop_index("ix_asset_transactions_asset_id", table_name="asset_transactions")
    op.drop_table("asset_transactions")
    op.drop_index("uq_borrow_requests_active_pair", table_name="borrow_requests")
    op.drop_index("ix_borrow_requests_status", table_name="borrow_requests")
    op.drop_index("ix_borrow_requests_requester_id", table_name="borrow_requests")
    op.drop_index("ix_borrow_requests_asset_id", table_name="borrow_requests")
    op.drop_table("borrow_requests")
    op.drop_index("ix_assets_current_holder_id", table_name="assets")
    op.drop_index("ix_assets_status", table_name="assets")
    op.drop_index("ix_assets_category_id", table_name="assets")
    op.drop_table("assets")
    op.drop_table("asset_categories")
    op.drop_index("ix_accounts_role", table_name="accounts")
    op.drop_index("ix_accounts_username", table_name="accounts")
    op.drop_table("accounts")
