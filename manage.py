#!/usr/bin/env python3
"""
Materials inventory management CLI.

Usage:
    python manage.py migrate                      Apply pending migrations
    python manage.py start [--dev]                Start the API server
    python manage.py grant-role USER_ID ROLE      Grant a role (e.g. the first admin)
    python manage.py revoke-role USER_ID ROLE     Revoke a role
    python manage.py reorder-report               Print the reorder report
"""

import argparse
import asyncio
import subprocess
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent


async def _migrate(include_sample_data: bool | None) -> int:
    from matinv.infrastructure.storage.sqlite.migrations import (
        get_migration_status,
        initialize_database,
        verify_schema_integrity,
    )

    results = await initialize_database(include_sample_data=include_sample_data)
    for result in results:
        state = "ok" if result.success else f"FAILED: {result.error}"
        print(f"  v{result.version}_{result.name}: {state} ({result.execution_time_ms}ms)")

    if not results:
        print("No pending migrations.")

    status = await get_migration_status()
    print(f"Schema version: {status.current_version}")
    if status.pending:
        print(f"  pending: {', '.join(status.pending)}")

    failed = [c for c in await verify_schema_integrity() if not c.passed]
    for check in failed:
        print(f"  integrity check failed: {check.check} {check.details}")

    return 1 if failed or not all(r.success for r in results) else 0


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending migrations."""
    include_sample_data = False if args.no_sample_data else None
    sys.exit(asyncio.run(_migrate(include_sample_data)))


def cmd_start(args: argparse.Namespace) -> None:
    """Start the API server with uvicorn."""
    uvicorn_cmd = [
        sys.executable, "-m", "uvicorn",
        "matinv.api.main:app",
        "--host", args.host,
        "--port", str(args.port),
    ]
    if args.dev:
        uvicorn_cmd.append("--reload")
    elif args.workers and args.workers > 1:
        uvicorn_cmd += ["--workers", str(args.workers)]

    print(f"Starting server on {args.host}:{args.port}...")
    print(f"  API docs:  http://{args.host}:{args.port}/docs (with API_DEBUG=true)")

    try:
        sys.exit(subprocess.call(uvicorn_cmd, cwd=str(ROOT_DIR)))
    except KeyboardInterrupt:
        print("Server stopped.")


async def _change_role(user_id: str, role: str, grant: bool) -> int:
    from matinv.core.entities.actor import Role
    from matinv.infrastructure.storage.sqlite import close_pool, get_user_role_store
    from matinv.infrastructure.storage.sqlite.migrations import initialize_database

    await initialize_database(create_backup_before=False)
    store = await get_user_role_store()
    try:
        if grant:
            await store.assign_role(user_id, Role(role))
            print(f"Granted {role} to {user_id}.")
            return 0

        if await store.revoke_role(user_id, Role(role)):
            print(f"Revoked {role} from {user_id}.")
            return 0
        print(f"{user_id} does not have role {role}.")
        return 1
    finally:
        await close_pool()


def cmd_grant_role(args: argparse.Namespace) -> None:
    """Grant a role to a user."""
    sys.exit(asyncio.run(_change_role(args.user_id, args.role, grant=True)))


def cmd_revoke_role(args: argparse.Namespace) -> None:
    """Revoke a role from a user."""
    sys.exit(asyncio.run(_change_role(args.user_id, args.role, grant=False)))


async def _reorder_report() -> int:
    from matinv.application.use_cases import GenerateReorderReportUseCase
    from matinv.infrastructure.storage.sqlite import close_pool

    try:
        report = await GenerateReorderReportUseCase().execute()
    finally:
        await close_pool()

    print(f"Reorder report ({report.generated_at:%Y-%m-%d %H:%M} UTC)")
    print(f"  {report.critical_count} critical, {report.low_count} low")
    if not report.lines:
        print("  Nothing to reorder.")
        return 0

    print()
    print(f"  {'Code':<10} {'Status':<9} {'On hand':>10} {'Order':>8}  {'Shortage':<10} Supplier")
    for line in report.lines:
        m = line.material
        flag = " !" if line.urgent else ""
        print(
            f"  {m.material_code:<10} {m.status.value:<9} "
            f"{m.current_quantity:>10g} {line.recommended_order_qty:>8}  "
            f"{line.days_until_shortage_label:<10} {line.supplier_name or '-'}{flag}"
        )
    return 0


def cmd_reorder_report(args: argparse.Namespace) -> None:
    """Print the reorder report."""
    sys.exit(asyncio.run(_reorder_report()))


def main() -> None:
    from matinv.config import configure_logging

    configure_logging()

    parser = argparse.ArgumentParser(
        description="Materials inventory management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    roles = ["admin", "manager", "operator"]

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument(
        "--no-sample-data", action="store_true", help="Skip the sample data migration"
    )
    p_migrate.set_defaults(func=cmd_migrate)

    # start
    p_start = sub.add_parser("start", help="Start the API server")
    p_start.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    p_start.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    p_start.add_argument("--dev", action="store_true", help="Reload on code changes")
    p_start.add_argument("--workers", type=int, default=1, help="Number of uvicorn workers")
    p_start.set_defaults(func=cmd_start)

    # grant-role
    p_grant = sub.add_parser("grant-role", help="Grant a role to a user")
    p_grant.add_argument("user_id", help="User ID as sent by the auth proxy")
    p_grant.add_argument("role", choices=roles)
    p_grant.set_defaults(func=cmd_grant_role)

    # revoke-role
    p_revoke = sub.add_parser("revoke-role", help="Revoke a role from a user")
    p_revoke.add_argument("user_id", help="User ID as sent by the auth proxy")
    p_revoke.add_argument("role", choices=roles)
    p_revoke.set_defaults(func=cmd_revoke_role)

    # reorder-report
    p_report = sub.add_parser("reorder-report", help="Print the reorder report")
    p_report.set_defaults(func=cmd_reorder_report)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
