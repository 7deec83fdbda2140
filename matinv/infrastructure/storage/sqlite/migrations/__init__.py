"""Database migrations module."""

from matinv.infrastructure.storage.sqlite.migrations.migrator import (
    IntegrityCheck,
    MigrationInfo,
    MigrationResult,
    MigrationStatus,
    discover_migrations,
    get_current_version,
    get_migration_status,
    initialize_database,
    restore_snapshot,
    run_migrations,
    snapshot_database,
    verify_schema_integrity,
)

__all__ = [
    "IntegrityCheck",
    "MigrationInfo",
    "MigrationResult",
    "MigrationStatus",
    "discover_migrations",
    "get_current_version",
    "get_migration_status",
    "initialize_database",
    "restore_snapshot",
    "run_migrations",
    "snapshot_database",
    "verify_schema_integrity",
]
