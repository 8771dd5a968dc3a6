"""CLI commands for database and data maintenance."""

import argparse
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, NoReturn

from flask import Flask

from tote_inventory import create_app
from tote_inventory.database import (
    check_db_connection,
    get_current_revision,
    get_pending_migrations,
    sync_master_data_from_setup,
    upgrade_database,
)
from tote_inventory.exceptions import BusinessLogicException


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        description="Tote Inventory CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # upgrade-db command
    upgrade_parser = subparsers.add_parser(
        "upgrade-db",
        help="Apply database migrations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Apply pending database migrations using Alembic, then sync the container
type catalog.

Examples:
  tote-inventory-cli upgrade-db                    Apply pending migrations
  tote-inventory-cli upgrade-db --recreate --yes-i-am-sure  Drop all tables and recreate from migrations
        """,
    )
    upgrade_parser.add_argument(
        "--recreate",
        action="store_true",
        help="Drop all tables first, then run all migrations from scratch",
    )
    upgrade_parser.add_argument(
        "--yes-i-am-sure",
        action="store_true",
        help="Required safety flag when using --recreate",
    )

    subparsers.add_parser(
        "seed-container-types",
        help="Upsert the built-in container type catalog",
    )

    migrate_parser = subparsers.add_parser(
        "migrate-container-types",
        help="Match untyped containers to container types",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Match containers that only carry a free-text type to a container type.
Without --apply this only reports what would change.

Examples:
  tote-inventory-cli migrate-container-types          Dry run
  tote-inventory-cli migrate-container-types --apply  Write the matches
        """,
    )
    migrate_parser.add_argument(
        "--apply",
        action="store_true",
        help="Write the matches instead of only reporting them",
    )

    import_parser = subparsers.add_parser(
        "import-csv",
        help="Import items from an intake form CSV export",
    )
    import_parser.add_argument("path", type=Path, help="CSV file to import")

    return parser


def _run_in_session(app: Flask, action: Callable[[Any], Any]) -> Any:
    """Run ``action`` with the service container and commit, or roll back on error."""
    with app.app_context():
        container = app.container
        session = container.db_session()
        try:
            result = action(container)
            session.commit()
            return result
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
            container.db_session.reset()


def handle_upgrade_db(
    app: Flask, recreate: bool = False, confirmed: bool = False
) -> None:
    """Handle upgrade-db command."""
    with app.app_context():
        # Check database connectivity
        if not check_db_connection():
            print(
                "❌ Cannot connect to database. Check your DATABASE_URL configuration.",
                file=sys.stderr,
            )
            sys.exit(1)

        # Let operator know which database is targeted
        print(f"🗄  Using database: {app.config['SQLALCHEMY_DATABASE_URI']}")

        # Safety check for recreate
        if recreate and not confirmed:
            print(
                "❌ --recreate requires --yes-i-am-sure flag for safety",
                file=sys.stderr,
            )
            print(
                "   This will DROP ALL TABLES and recreate from migrations!",
                file=sys.stderr,
            )
            sys.exit(1)

        if recreate:
            print("⚠️  WARNING: About to drop all tables and recreate from migrations!")
            print("   This will permanently delete all data in the database.")

        # Show current state
        current_rev = get_current_revision()
        pending = get_pending_migrations()

        if current_rev:
            print(f"📍 Current database revision: {current_rev}")
        else:
            print("📍 Database has no migration version (empty or new database)")

        # Phase 1: Apply schema migrations (if needed)
        if recreate or pending:
            if recreate:
                print("🔄 Recreating database from scratch...")
            else:
                print(f"📦 Found {len(pending)} pending migration(s)")

            try:
                applied = upgrade_database(recreate=recreate)
                if applied:
                    print(f"✅ Successfully applied {len(applied)} migration(s)")
                    for revision, description in applied:
                        print(f"   • {revision}: {description}")
                else:
                    print("✅ Database migration completed")
            except Exception as e:
                print(f"❌ Migration failed: {e}", file=sys.stderr)
                sys.exit(1)
        else:
            print("✅ Database is up to date. No migrations to apply.")

        # Phase 2: Sync master data unconditionally
        sync_master_data_from_setup()


def handle_seed_container_types(app: Flask) -> None:
    """Handle seed-container-types command."""
    try:
        result = _run_in_session(
            app, lambda container: container.setup_service().sync_container_types_from_setup()
        )
    except BusinessLogicException as e:
        print(f"❌ Seeding failed: {e.message}", file=sys.stderr)
        sys.exit(1)

    print(f"✅ Container types seeded: {result.created} created, {result.updated} updated")


def handle_migrate_container_types(app: Flask, apply: bool = False) -> None:
    """Handle migrate-container-types command."""
    result = _run_in_session(
        app,
        lambda container: container.container_migration_service().migrate_container_types(
            dry_run=not apply
        ),
    )

    mode = "Applied" if apply else "Dry run"
    print(f"🔍 {mode}: {result.total_containers} untyped container(s)")
    for detail in result.details:
        if detail.error:
            print(f"   ✗ {detail.container_code} ({detail.legacy_type}) failed: {detail.error}")
        elif detail.matched_type_name:
            print(f"   ✓ {detail.container_code} ({detail.legacy_type}) -> {detail.matched_type_name}")
        else:
            print(f"   ✗ {detail.container_code} ({detail.legacy_type}) has no matching type")
    print(f"✅ {result.matched} matched, {result.unmatched} unmatched")
    if result.failed:
        print(f"⚠️  {result.failed} container(s) failed")


def handle_import_csv(app: Flask, path: Path) -> None:
    """Handle import-csv command."""
    if not path.is_file():
        print(f"❌ CSV file not found: {path}", file=sys.stderr)
        sys.exit(1)

    print(f"📄 Importing {path}")

    def run_import(container: Any) -> Any:
        with path.open(encoding="utf-8-sig", newline="") as csv_file:
            return container.csv_import_service().import_csv(csv_file)

    result = _run_in_session(app, run_import)

    print(f"📦 {result.containers_created} container(s) created")
    print(f"📍 {result.locations_created} location(s) created")
    print(f"📝 {result.items_created} item(s) created, {result.duplicates} already imported")
    print(f"📷 {result.photos_created} photo(s) created")
    if result.skipped or result.failed:
        print(f"⚠️  {result.skipped} row(s) skipped, {result.failed} row(s) failed")
        for error in result.errors:
            print(f"   • row {error.row_number}: {error.message}")
    print(f"✅ Processed {result.rows_total} row(s)")


def main() -> NoReturn:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Create Flask app for database operations
    app = create_app()

    if args.command == "upgrade-db":
        handle_upgrade_db(
            app=app,
            recreate=args.recreate,
            confirmed=args.yes_i_am_sure,
        )
    elif args.command == "seed-container-types":
        handle_seed_container_types(app)
    elif args.command == "migrate-container-types":
        handle_migrate_container_types(app, apply=args.apply)
    elif args.command == "import-csv":
        handle_import_csv(app, args.path)
    else:
        print(f"❌ Unknown command: {args.command}", file=sys.stderr)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
