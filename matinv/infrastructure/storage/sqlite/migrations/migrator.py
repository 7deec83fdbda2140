"""
Schema migrations for the inventory database.

Migrations are SQL files named ``v<NNN>_<name>.sql`` next to this module and
are applied in version order. Each applied version is recorded in
``schema_migrations`` together with a checksum of the file it came from.
Files whose name ends in ``sample_data`` seed demo materials and are skipped
when ``INVENTORY_LOAD_SAMPLE_DATA`` is false.

Before migrating an existing database a snapshot is taken with SQLite's
online backup API; it is restored if a migration raises and dropped once
every pending migration has applied.
"""

import hashlib
import re
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

import aiosqlite

from matinv.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
SAMPLE_DATA_SUFFIX = "sample_data"
MIGRATION_FILENAME = re.compile(r"v(\d+)_(.+)\.sql")

REQUIRED_TABLES = (
    "schema_migrations",
    "warehouses",
    "suppliers",
    "materials",
    "user_roles",
    "stock_history",
)
LEDGER_TRIGGERS = ("stock_history_no_update", "stock_history_no_delete")

# Mirrors derive_status in core.services.stock_status
_DERIVED_STATUS_SQL = """
    SELECT id, material_code, status,
           CASE
               WHEN current_quantity <= safety_stock THEN 'critical'
               WHEN current_quantity <= reorder_point THEN 'low'
               ELSE 'safe'
           END AS expected
    FROM materials
"""


@dataclass(frozen=True)
class MigrationInfo:
    """A migration file on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = MIGRATION_FILENAME.fullmatch(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")
        checksum = hashlib.sha256(path.read_bytes()).hexdigest()[:16]
        return cls(version=match.group(1), name=match.group(2), path=path, checksum=checksum)

    @property
    def label(self) -> str:
        return f"v{self.version}_{self.name}"

    @property
    def is_sample_data(self) -> bool:
        return self.name.endswith(SAMPLE_DATA_SUFFIX)


@dataclass
class MigrationResult:
    """Outcome of applying one migration."""

    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


@dataclass
class MigrationStatus:
    """Where a database stands relative to the bundled migrations."""

    exists: bool
    current_version: str | None = None
    applied: list[str] = field(default_factory=list)
    pending: list[str] = field(default_factory=list)

    @property
    def up_to_date(self) -> bool:
        return self.exists and not self.pending


@dataclass
class IntegrityCheck:
    """One schema or data consistency check."""

    check: str
    passed: bool
    details: dict[str, Any] = field(default_factory=dict)


def discover_migrations(include_sample_data: bool = True) -> list[MigrationInfo]:
    """Migration files in version order; badly named files are logged and ignored."""
    migrations = []
    for path in sorted(MIGRATIONS_DIR.glob("v*.sql")):
        try:
            migration = MigrationInfo.from_file(path)
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
            continue
        if migration.is_sample_data and not include_sample_data:
            continue
        migrations.append(migration)
    return migrations


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied versions mapped to the checksum they were applied with."""
    try:
        cursor = await conn.execute(
            "SELECT version, checksum FROM schema_migrations ORDER BY version"
        )
    except aiosqlite.OperationalError:
        # Fresh database, the tracking table is created by v001
        return {}
    return {version: checksum for version, checksum in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    applied = await get_applied_migrations(conn)
    return max(applied) if applied else None


async def apply_migration(
    conn: aiosqlite.Connection,
    migration: MigrationInfo,
) -> MigrationResult:
    """Run one migration script and record it. SQL errors are returned, not raised."""
    logger.info("applying_migration", migration=migration.label)
    started = time.perf_counter()

    def elapsed_ms() -> int:
        return int((time.perf_counter() - started) * 1000)

    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        await conn.execute(
            """
            INSERT OR REPLACE INTO schema_migrations (version, name, checksum, execution_time_ms)
            VALUES (?, ?, ?, ?)
            """,
            (migration.version, migration.name, migration.checksum, elapsed_ms()),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error("migration_failed", migration=migration.label, error=str(e))
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=elapsed_ms(),
            error=str(e),
        )

    logger.info("migration_applied", migration=migration.label, execution_time_ms=elapsed_ms())
    return MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        execution_time_ms=elapsed_ms(),
    )


async def _copy_database(source: Path, target: Path) -> None:
    # The backup API sees committed WAL pages that a plain file copy would miss
    async with aiosqlite.connect(source) as src, aiosqlite.connect(target) as dst:
        await src.backup(dst)


async def snapshot_database(db_path: Path) -> Path:
    """Write a point-in-time copy of the database next to it."""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_name(f"{db_path.stem}.backup_{stamp}{db_path.suffix}")
    await _copy_database(db_path, backup_path)
    logger.info("database_snapshot_created", backup_path=str(backup_path))
    return backup_path


async def restore_snapshot(db_path: Path, backup_path: Path) -> None:
    await _copy_database(backup_path, db_path)
    logger.warning("database_restored_from_snapshot", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
    include_sample_data: bool | None = None,
) -> list[MigrationResult]:
    """
    Apply every pending migration.

    Args:
        db_path: Database file (default: settings.storage.db_path)
        create_backup_before: Snapshot an existing database first
        include_sample_data: Apply sample data migrations
            (default: settings.inventory.load_sample_data)

    Returns:
        Results for the migrations attempted, stopping at the first failure.
    """
    settings = get_settings()
    db_path = db_path or settings.storage.db_path
    if include_sample_data is None:
        include_sample_data = settings.inventory.load_sample_data

    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("initializing_database", db_path=str(db_path), sample_data=include_sample_data)

    migrations = discover_migrations(include_sample_data=include_sample_data)
    if not migrations:
        logger.warning("no_migrations_found", directory=str(MIGRATIONS_DIR))
        return []

    backup_path = None
    if create_backup_before and db_path.exists():
        backup_path = await snapshot_database(db_path)

    results: list[MigrationResult] = []
    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute("PRAGMA foreign_keys=ON")
            applied = await get_applied_migrations(conn)

            for migration in migrations:
                if migration.version in applied:
                    if applied[migration.version] != migration.checksum:
                        logger.warning("migration_checksum_changed", migration=migration.label)
                    continue

                result = await apply_migration(conn, migration)
                results.append(result)
                if not result.success:
                    break
    except Exception as e:
        logger.error("database_initialization_failed", error=str(e))
        if backup_path is not None:
            await restore_snapshot(db_path, backup_path)
        raise

    if backup_path is not None and all(r.success for r in results):
        backup_path.unlink()

    logger.info(
        "database_initialized",
        applied=[f"v{r.version}_{r.name}" for r in results if r.success],
    )
    return results


# Alias used by the application lifespan
run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> MigrationStatus:
    """Applied and pending versions for a database file."""
    settings = get_settings()
    db_path = db_path or settings.storage.db_path

    if not db_path.exists():
        return MigrationStatus(exists=False)

    async with aiosqlite.connect(db_path) as conn:
        applied = await get_applied_migrations(conn)

    bundled = discover_migrations(include_sample_data=settings.inventory.load_sample_data)
    return MigrationStatus(
        exists=True,
        current_version=max(applied) if applied else None,
        applied=list(applied),
        pending=[m.version for m in bundled if m.version not in applied],
    )


async def verify_schema_integrity(db_path: Path | None = None) -> list[IntegrityCheck]:
    """
    Check the database for structural and ledger problems.

    Covers SQLite's own integrity and foreign key checks, the presence of
    every table and of the triggers that keep stock_history append-only,
    and that each material's stored status agrees with its thresholds.
    """
    db_path = db_path or get_settings().storage.db_path
    checks: list[IntegrityCheck] = []

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("PRAGMA integrity_check")
        (result,) = await cursor.fetchone()
        checks.append(IntegrityCheck("integrity", result == "ok", {"result": result}))

        cursor = await conn.execute("PRAGMA foreign_key_check")
        violations = await cursor.fetchall()
        checks.append(
            IntegrityCheck("foreign_keys", not violations, {"violations": len(violations)})
        )

        cursor = await conn.execute("SELECT type, name FROM sqlite_master")
        objects = {(kind, name) for kind, name in await cursor.fetchall()}

        missing_tables = [t for t in REQUIRED_TABLES if ("table", t) not in objects]
        checks.append(
            IntegrityCheck("required_tables", not missing_tables, {"missing": missing_tables})
        )

        missing_triggers = [t for t in LEDGER_TRIGGERS if ("trigger", t) not in objects]
        checks.append(
            IntegrityCheck(
                "ledger_append_only", not missing_triggers, {"missing": missing_triggers}
            )
        )

        if ("table", "materials") in objects:
            cursor = await conn.execute(_DERIVED_STATUS_SQL)
            rows = await cursor.fetchall()
            stale = [code for _, code, stored, expected in rows if stored != expected]
            checks.append(IntegrityCheck("derived_status", not stale, {"stale": stale}))

    return checks
