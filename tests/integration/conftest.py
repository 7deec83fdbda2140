"""Fixtures for end-to-end tests against a migrated SQLite database."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

import matinv.infrastructure.storage.sqlite.connection as conn_module
from matinv.api.main import app
from matinv.core.entities.actor import Role
from matinv.infrastructure.storage.sqlite import SQLiteUserRoleStore
from matinv.infrastructure.storage.sqlite.connection import close_pool
from matinv.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture
async def live_db(tmp_path: Path) -> AsyncGenerator[Path, None]:
    """Migrated database with sample data and one user per role."""
    db_path = tmp_path / "inventory.db"
    results = await initialize_database(
        db_path, create_backup_before=False, include_sample_data=True
    )
    assert all(r.success for r in results)

    settings = MagicMock()
    settings.storage.db_path = db_path
    settings.storage.pool_size = 2
    settings.storage.busy_timeout = 5000

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=settings):
        try:
            roles = SQLiteUserRoleStore()
            await roles.assign_role("admin-1", Role.ADMIN)
            await roles.assign_role("manager-1", Role.MANAGER)
            await roles.assign_role("operator-1", Role.OPERATOR)
            yield db_path
        finally:
            await close_pool()


@pytest.fixture
async def live_client(live_db) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
