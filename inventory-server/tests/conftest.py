"""Shared fixtures: a file-backed sqlite database per test with seeded accounts and an asset."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio

from inventory_app.core.config import DatabaseSettings, SecuritySettings, Settings
from inventory_app.infrastructure.database import build_engine, build_session_factory, init_db
from inventory_app.modules.accounts import AccountCreateInput, AccountService
from inventory_app.modules.assets import AssetCreateInput, AssetRegistry
from inventory_app.modules.borrowing import BorrowWorkflowEngine
from inventory_app.modules.categories import CategoryService
from inventory_app.modules.common.identity import Role

PASSWORDS = {
    "admin": "admin-pass",
    "alice": "alice-pass",
    "bob": "bob-pass",
}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        environment="test",
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'inventory.db'}"),
        security=SecuritySettings(secret_key="test-secret-key", bcrypt_rounds=4),
    )


@pytest_asyncio.fixture
async def engine(settings):
    engine = build_engine(settings)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def workflow(session_factory, settings) -> BorrowWorkflowEngine:
    return BorrowWorkflowEngine(session_factory, settings)


@pytest_asyncio.fixture
async def accounts(session_factory, settings):
    roles = {"admin": Role.ADMIN, "alice": Role.VIEWER, "bob": Role.STAFF}
    identities = {}
    async with session_factory.begin() as session:
        service = AccountService.with_session(session, bcrypt_rounds=settings.security.bcrypt_rounds)
        for username, role in roles.items():
            account = await service.create_account(
                AccountCreateInput(username=username, password=PASSWORDS[username], role=role)
            )
            identities[username] = account.identity()
    return identities


@pytest.fixture
def admin(accounts):
    return accounts["admin"]


@pytest.fixture
def alice(accounts):
    return accounts["alice"]


@pytest.fixture
def bob(accounts):
    return accounts["bob"]


@pytest_asyncio.fixture
async def category(session_factory):
    async with session_factory.begin() as session:
        return await CategoryService.with_session(session).create(name="Laptops", description="Portable computers")


@pytest_asyncio.fixture
async def asset(session_factory, settings, admin, category):
    async with session_factory.begin() as session:
        return await AssetRegistry.with_session(session, settings).create(
            admin,
            AssetCreateInput(
                name="Laptop 01",
                serial_number="SN-0001",
                category_id=category.id,
                cost=Decimal("1299.00"),
                purchase_date=date(2024, 1, 15),
            ),
        )
