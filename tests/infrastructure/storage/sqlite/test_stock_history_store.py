"""Tests for SQLiteStockHistoryStore."""

from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import aiosqlite
import pytest

from matinv.core.entities.actor import Actor
from matinv.core.entities.material import StockStatus
from matinv.core.entities.stock_history import UpdateReason
from matinv.core.exceptions import (
    ConcurrentAdjustmentError,
    DatabaseError,
    MaterialNotFoundError,
)
from matinv.core.services.stock_ledger import StockLedger
from matinv.infrastructure.storage.sqlite.connection import get_connection
from matinv.infrastructure.storage.sqlite.material_store import SQLiteMaterialStore
from matinv.infrastructure.storage.sqlite.stock_history_store import SQLiteStockHistoryStore

ACTOR = Actor(user_id="operator-1")


@pytest.fixture
def material_store(db) -> SQLiteMaterialStore:
    return SQLiteMaterialStore()


@pytest.fixture
def history_store(db) -> SQLiteStockHistoryStore:
    return SQLiteStockHistoryStore()


@pytest.fixture
async def material(material_store, sample_material):
    return await material_store.create_material(sample_material)


async def _history_count() -> int:
    async with get_connection() as conn:
        cursor = await conn.execute("SELECT COUNT(*) FROM stock_history")
        return (await cursor.fetchone())[0]


class TestCommitAdjustment:
    async def test_commit_updates_material_and_appends_entry(
        self, material_store, history_store, material
    ):
        result = StockLedger().apply_adjustment(
            material, -300, UpdateReason.PRODUCTION_USE, ACTOR, notes="line 3"
        )

        saved, entry = await history_store.commit_adjustment(result.material, result.entry)

        assert entry.id is not None
        assert saved.current_quantity == 150
        stored = await material_store.get_material(material.id)
        assert stored.current_quantity == 150
        assert stored.status == StockStatus.CRITICAL

        records = await history_store.list_history(material_id=material.id)
        assert len(records) == 1
        record = records[0]
        assert record.entry.id == entry.id
        assert record.entry.quantity_before == 450
        assert record.entry.quantity_after == 150
        assert record.entry.quantity_change == -300
        assert record.entry.reason == UpdateReason.PRODUCTION_USE
        assert record.entry.notes == "line 3"
        assert record.entry.user_id == "operator-1"
        assert record.material_code == "STL-001"
        assert record.unit == "kg"

    async def test_stale_quantity_rejected(self, material_store, history_store, material):
        ledger = StockLedger()
        first = ledger.apply_adjustment(material, 10, UpdateReason.PURCHASE, ACTOR)
        # Computed from the same snapshot, so it no longer matches after the first commit
        second = ledger.apply_adjustment(material, -20, UpdateReason.DAMAGE, ACTOR)
        await history_store.commit_adjustment(first.material, first.entry)

        with pytest.raises(ConcurrentAdjustmentError):
            await history_store.commit_adjustment(second.material, second.entry)

        assert (await material_store.get_material(material.id)).current_quantity == 460
        assert await _history_count() == 1

    async def test_missing_material(self, history_store, sample_material):
        result = StockLedger().apply_adjustment(
            sample_material.model_copy(update={"id": "ghost"}),
            5,
            UpdateReason.PURCHASE,
            ACTOR,
        )

        with pytest.raises(MaterialNotFoundError):
            await history_store.commit_adjustment(result.material, result.entry)

        assert await _history_count() == 0

    async def test_failed_insert_rolls_back_quantity(
        self, material_store, history_store, material
    ):
        """A history insert failure leaves the material quantity untouched."""
        result = StockLedger().apply_adjustment(material, 25, UpdateReason.RETURN, ACTOR)
        # Reusing an existing entry id violates the primary key on insert
        saved, entry = await history_store.commit_adjustment(result.material, result.entry)
        again = StockLedger().apply_adjustment(saved, 5, UpdateReason.RETURN, ACTOR)
        duplicate = again.entry.model_copy(update={"id": entry.id})

        with pytest.raises(DatabaseError):
            await history_store.commit_adjustment(again.material, duplicate)

        assert (await material_store.get_material(material.id)).current_quantity == 475
        assert await _history_count() == 1

    async def test_storage_error_wrapped(self, history_store, material):
        result = StockLedger().apply_adjustment(material, 1, UpdateReason.PURCHASE, ACTOR)

        with patch(
            "matinv.infrastructure.storage.sqlite.stock_history_store.get_transaction",
            side_effect=aiosqlite.OperationalError("disk I/O error"),
        ):
            with pytest.raises(DatabaseError, match="disk I/O error"):
                await history_store.commit_adjustment(result.material, result.entry)


class TestListHistory:
    async def test_newest_first_and_paged(self, history_store, material):
        ledger = StockLedger()
        start = datetime(2024, 1, 1, tzinfo=UTC)
        current = material
        for day, delta in enumerate([100, -50, 30]):
            result = ledger.apply_adjustment(
                current,
                delta,
                UpdateReason.ADJUSTMENT,
                ACTOR,
                now=start + timedelta(days=day),
            )
            current, _ = await history_store.commit_adjustment(result.material, result.entry)

        records = await history_store.list_history()
        assert [r.entry.quantity_change for r in records] == [30, -50, 100]

        page = await history_store.list_history(limit=1, offset=1)
        assert [r.entry.quantity_change for r in page] == [-50]

        assert await history_store.count_for_material(material.id) == 3
        assert await history_store.count_for_material("other") == 0

    async def test_filter_by_material(
        self, material_store, history_store, material, sample_material
    ):
        other = await material_store.create_material(
            sample_material.model_copy(update={"material_code": "ALU-002"})
        )
        ledger = StockLedger()
        for target in (material, other):
            result = ledger.apply_adjustment(target, 1, UpdateReason.PURCHASE, ACTOR)
            await history_store.commit_adjustment(result.material, result.entry)

        records = await history_store.list_history(material_id=other.id)

        assert [r.material_code for r in records] == ["ALU-002"]
