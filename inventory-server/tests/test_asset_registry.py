"""Asset registry: validation, uniqueness, retire versus delete."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest

from inventory_app.modules.assets import (
    AssetAlreadyExistsError,
    AssetCreateInput,
    AssetInUseError,
    AssetNotFoundError,
    AssetRegistry,
    AssetStatus,
    AssetUpdateInput,
    AssetValidationError,
)
from inventory_app.modules.categories import CategoryInUseError, CategoryNotFoundError, CategoryService
from inventory_app.modules.ledger import TransactionAction, TransactionLedger


def _payload(category_id: str, **overrides) -> AssetCreateInput:
    values = {
        "name": "Projector",
        "serial_number": "PRJ-100",
        "category_id": category_id,
        "cost": Decimal("450.00"),
        "purchase_date": date(2023, 6, 1),
    }
    values.update(overrides)
    return AssetCreateInput(**values)


async def _actions(session, asset_id):
    return [record.action for record in await TransactionLedger.with_session(session).list_for_asset(asset_id)]


@pytest.mark.asyncio
async def test_create_appends_ledger_and_audit(session_factory, settings, admin, category):
    async with session_factory.begin() as session:
        registry = AssetRegistry.with_session(session, settings)
        created = await registry.create(admin, _payload(category.id))

        assert created.status == AssetStatus.AVAILABLE
        assert created.borrowed_by is None
        assert await _actions(session, created.id) == [TransactionAction.CREATE]
        latest = await TransactionLedger.with_session(session).latest_for(created.id)
        assert latest.user_id == admin.id
        assert (await registry.audit.by_action_type("CREATE"))[0].entity_id == created.id


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "X"},
        {"name": "Y" * 101},
        {"serial_number": "prj-100"},
        {"serial_number": "PRJ 100"},
        {"cost": Decimal("0")},
        {"purchase_date": date.today() + timedelta(days=1)},
        {"status": "IN_USE"},
        {"status": "BROKEN"},
    ],
)
async def test_create_rejects_invalid_fields(session_factory, settings, admin, category, overrides):
    async with session_factory.begin() as session:
        with pytest.raises(AssetValidationError):
            await AssetRegistry.with_session(session, settings).create(admin, _payload(category.id, **overrides))


@pytest.mark.asyncio
async def test_create_rejects_duplicate_name_or_serial(session_factory, settings, admin, asset):
    async with session_factory.begin() as session:
        registry = AssetRegistry.with_session(session, settings)
        with pytest.raises(AssetAlreadyExistsError):
            await registry.create(admin, _payload(asset.category_id, name=asset.name))
        with pytest.raises(AssetAlreadyExistsError):
            await registry.create(admin, _payload(asset.category_id, serial_number=asset.serial_number))


@pytest.mark.asyncio
async def test_unique_constraint_race_reported_as_duplicate(monkeypatch, session_factory, settings, admin, asset):
    async with session_factory.begin() as session:
        other = await AssetRegistry.with_session(session, settings).create(admin, _payload(asset.category_id))

    # another writer commits the same name between the uniqueness read and the flush
    async def skip_uniqueness_check(self, *args, **kwargs):
        return None

    monkeypatch.setattr(AssetRegistry, "_ensure_unique", skip_uniqueness_check)

    with pytest.raises(AssetAlreadyExistsError):
        async with session_factory.begin() as session:
            await AssetRegistry.with_session(session, settings).create(
                admin, _payload(asset.category_id, name=asset.name, serial_number="PRJ-200")
            )
    with pytest.raises(AssetAlreadyExistsError):
        async with session_factory.begin() as session:
            await AssetRegistry.with_session(session, settings).update(
                admin, other.id, AssetUpdateInput(serial_number=asset.serial_number)
            )

    async with session_factory() as session:
        registry = AssetRegistry.with_session(session, settings)
        assert (await registry.list_assets()).total == 2
        assert (await registry.get(other.id)).serial_number == "PRJ-100"


@pytest.mark.asyncio
async def test_create_requires_known_category(session_factory, settings, admin, category):
    async with session_factory.begin() as session:
        with pytest.raises(CategoryNotFoundError):
            await AssetRegistry.with_session(session, settings).create(admin, _payload("missing-category"))


@pytest.mark.asyncio
async def test_update_checks_uniqueness_against_other_assets(session_factory, settings, admin, asset):
    async with session_factory.begin() as session:
        registry = AssetRegistry.with_session(session, settings)
        other = await registry.create(admin, _payload(asset.category_id))

        # keeping its own name and serial is fine
        renamed = await registry.update(admin, asset.id, AssetUpdateInput(name=asset.name, image_url="/img/1.png"))
        assert renamed.image_url == "/img/1.png"

        with pytest.raises(AssetAlreadyExistsError):
            await registry.update(admin, asset.id, AssetUpdateInput(serial_number=other.serial_number))


@pytest.mark.asyncio
async def test_update_writes_ledger_only_on_status_change(session_factory, settings, admin, asset):
    async with session_factory.begin() as session:
        registry = AssetRegistry.with_session(session, settings)

        await registry.update(admin, asset.id, AssetUpdateInput(cost=Decimal("1000.00")))
        assert await _actions(session, asset.id) == [TransactionAction.CREATE]

        updated = await registry.update(admin, asset.id, AssetUpdateInput(status="maintenance"))
        assert updated.status == AssetStatus.MAINTENANCE
        assert await _actions(session, asset.id) == [TransactionAction.CREATE, TransactionAction.MAINTENANCE]


@pytest.mark.asyncio
async def test_update_cannot_lend_an_asset(session_factory, settings, admin, asset):
    async with session_factory.begin() as session:
        with pytest.raises(AssetValidationError):
            await AssetRegistry.with_session(session, settings).update(
                admin, asset.id, AssetUpdateInput(status=AssetStatus.IN_USE)
            )


@pytest.mark.asyncio
async def test_update_out_of_use_clears_holder(workflow, session_factory, settings, admin, alice, asset):
    request = await workflow.create(alice, asset.id)
    await workflow.approve(request.id, admin)

    async with session_factory.begin() as session:
        damaged = await AssetRegistry.with_session(session, settings).update(
            admin, asset.id, AssetUpdateInput(status=AssetStatus.DAMAGED)
        )
    assert damaged.current_holder_id is None

    # returning a damaged asset records the return but leaves it DAMAGED
    await workflow.complete_by_requester(request.id, alice)
    async with session_factory() as session:
        current = await AssetRegistry.with_session(session, settings).get(asset.id)
        assert current.status == AssetStatus.DAMAGED
        assert (await _actions(session, asset.id))[-1] == TransactionAction.RETURN


@pytest.mark.asyncio
async def test_soft_retire_keeps_the_row(session_factory, settings, admin, asset):
    async with session_factory.begin() as session:
        registry = AssetRegistry.with_session(session, settings)
        retired = await registry.soft_retire(admin, asset.id)
        again = await registry.soft_retire(admin, asset.id)

        assert retired.status == AssetStatus.RETIRED
        assert again.status == AssetStatus.RETIRED
        assert (await registry.get(asset.id)).status == AssetStatus.RETIRED
        assert await _actions(session, asset.id) == [TransactionAction.CREATE, TransactionAction.RETIRE]
        assert len(await registry.audit.by_action_type("ARCHIVE")) == 1


@pytest.mark.asyncio
async def test_hard_delete_removes_row_but_keeps_history(session_factory, settings, admin, asset):
    async with session_factory.begin() as session:
        registry = AssetRegistry.with_session(session, settings)
        await registry.hard_delete(admin, asset.id)

        with pytest.raises(AssetNotFoundError):
            await registry.get(asset.id)
        history = await TransactionLedger.with_session(session).list_for_asset(asset.id)
        assert [record.action for record in history] == [TransactionAction.CREATE, TransactionAction.RETIRE]
        assert history[-1].notes == "Deleted asset Laptop 01"


@pytest.mark.asyncio
async def test_hard_delete_refused_while_requests_reference_asset(workflow, session_factory, settings, admin, alice, asset):
    await workflow.create(alice, asset.id)

    async with session_factory.begin() as session:
        with pytest.raises(AssetInUseError):
            await AssetRegistry.with_session(session, settings).hard_delete(admin, asset.id)


@pytest.mark.asyncio
async def test_list_assets_filters_and_pages(session_factory, settings, admin, asset):
    async with session_factory.begin() as session:
        registry = AssetRegistry.with_session(session, settings)
        await registry.create(admin, _payload(asset.category_id))
        await registry.create(admin, _payload(asset.category_id, name="Laptop 02", serial_number="SN-0002"))
        await registry.soft_retire(admin, asset.id)

        everything = await registry.list_assets(limit=2)
        laptops = await registry.list_assets(search="laptop")
        available = await registry.list_assets(status="AVAILABLE")
        in_category = await registry.find_assets_by_category(asset.category_id)

    assert everything.total == 3
    assert len(everything.items) == 2
    assert [item.name for item in laptops.items] == ["Laptop 01", "Laptop 02"]
    assert {item.name for item in available.items} == {"Laptop 02", "Projector"}
    assert len(in_category) == 3


@pytest.mark.asyncio
async def test_category_delete_guarded_by_assets(session_factory, admin, asset):
    async with session_factory.begin() as session:
        service = CategoryService.with_session(session)
        with pytest.raises(CategoryInUseError):
            await service.delete(asset.category_id)

        empty = await service.create(name="Monitors")
        await service.delete(empty.id)
        with pytest.raises(CategoryNotFoundError):
            await service.get(empty.id)
