"""Pytest configuration and fixtures."""

import os
import tempfile
from collections.abc import Callable
from datetime import UTC, datetime

import pytest

# Keep the app's default database out of the working tree
os.environ.setdefault("STORAGE_DATA_DIR", tempfile.mkdtemp(prefix="matinv-test-"))

from matinv.config import reset_settings  # noqa: E402
from matinv.core.entities import Actor, Material, Role  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are re-read from the environment for every test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def admin() -> Actor:
    return Actor(user_id="admin-1", roles=frozenset({Role.ADMIN}))


@pytest.fixture
def manager() -> Actor:
    return Actor(user_id="manager-1", roles=frozenset({Role.MANAGER}))


@pytest.fixture
def operator() -> Actor:
    return Actor(user_id="operator-1", roles=frozenset({Role.OPERATOR}))


@pytest.fixture
def make_material() -> Callable[..., Material]:
    """Factory for materials with sensible defaults."""

    def _make(**overrides) -> Material:
        values = {
            "id": "mat-1",
            "material_code": "STL-001",
            "name": "Steel Sheets",
            "unit": "kg",
            "current_quantity": 450,
            "reorder_point": 500,
            "safety_stock": 200,
            "avg_daily_usage": 50,
            "lead_time_days": 7,
        }
        values.update(overrides)
        return Material(**values)

    return _make
