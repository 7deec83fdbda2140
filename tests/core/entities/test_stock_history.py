"""Tests for stock ledger entities."""

import pytest
from pydantic import ValidationError

from matinv.core.entities.stock_history import StockHistoryEntry, UpdateReason


def _entry(**overrides) -> StockHistoryEntry:
    values = {
        "material_id": "mat-1",
        "user_id": "u1",
        "quantity_before": 100,
        "quantity_after": 130,
        "quantity_change": 30,
        "reason": UpdateReason.PURCHASE,
    }
    values.update(overrides)
    return StockHistoryEntry(**values)


class TestStockHistoryEntry:
    def test_balanced_entry(self):
        entry = _entry()
        assert entry.quantity_after == entry.quantity_before + entry.quantity_change

    def test_unbalanced_entry_rejected(self):
        with pytest.raises(ValidationError, match="quantity_after"):
            _entry(quantity_after=120)

    def test_float_noise_tolerated(self):
        entry = _entry(quantity_before=0.1, quantity_change=0.2, quantity_after=0.3)
        assert entry.quantity_after == 0.3

    def test_negative_after_rejected(self):
        with pytest.raises(ValidationError):
            _entry(quantity_before=10, quantity_change=-20, quantity_after=-10)

    def test_entries_are_immutable(self):
        entry = _entry()
        with pytest.raises(ValidationError):
            entry.quantity_after = 0

    def test_reason_from_string(self):
        assert _entry(reason="production_use").reason == UpdateReason.PRODUCTION_USE

    def test_unknown_reason_rejected(self):
        with pytest.raises(ValidationError):
            _entry(reason="theft")
