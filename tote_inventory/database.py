"""Database connection, migration and master data helpers."""

import logging
import re
from pathlib import Path

from sqlalchemy import MetaData, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory
from tote_inventory.config import get_settings
from tote_inventory.exceptions import InvalidOperationException
from tote_inventory.extensions import db
from tote_inventory.services.container_type_service import ContainerTypeService
from tote_inventory.services.setup_service import SetupService

logger = logging.getLogger(__name__)


def get_engine() -> Engine:
    """Get SQLAlchemy engine from current Flask app."""
    return db.engine


def check_db_connection() -> bool:
    """Check if database connection is working."""
    try:
        result = db.session.execute(text("SELECT 1"))
        return result.scalar() == 1
    except SQLAlchemyError as e:
        logger.warning(f"Database connection check failed: {e}")
        db.session.rollback()
        return False


def _get_alembic_config() -> Config:
    """Get Alembic configuration with database URL from the settings."""
    # alembic.ini lives in the project root (parent of tote_inventory/)
    alembic_cfg_path = Path(__file__).parent.parent / "alembic.ini"

    config = Config(str(alembic_cfg_path))
    config.set_main_option("sqlalchemy.url", get_settings().DATABASE_URL)

    return config


def get_current_revision() -> str | None:
    """Get current database revision from Alembic version table."""
    inspector = inspect(db.engine)
    if "alembic_version" not in inspector.get_table_names():
        return None

    with db.engine.connect() as connection:
        result = connection.execute(text("SELECT version_num FROM alembic_version"))
        row = result.fetchone()
        return row[0] if row else None


def get_pending_migrations() -> list[str]:
    """Get list of pending migration revisions in the order they apply."""
    script = ScriptDirectory.from_config(_get_alembic_config())

    current_rev = get_current_revision()
    head_rev = script.get_current_head()

    if not head_rev or current_rev == head_rev:
        return []

    base = current_rev or "base"
    revisions = [
        rev.revision
        for rev in script.walk_revisions(base=base, head=head_rev)
        if rev.revision != current_rev
    ]
    revisions.reverse()  # Want chronological order
    return revisions


def drop_all_tables() -> None:
    """Drop all tables including Alembic version table."""
    # Reflect so tables from older schema versions are dropped too
    metadata = MetaData()
    metadata.reflect(bind=db.engine)
    metadata.drop_all(bind=db.engine)


def _get_migration_info(script_dir: ScriptDirectory, revision: str) -> tuple[str, str]:
    """Extract a short revision id and the docstring title of a migration."""
    rev_obj = script_dir.get_revision(revision)
    if not rev_obj or not rev_obj.path:
        return revision, "Unknown migration"

    migration_file = Path(rev_obj.path)
    if not migration_file.exists():
        return revision, "Migration file not found"

    content = migration_file.read_text()

    docstring_match = re.search(r'"""([^"\n]+)', content)
    if docstring_match:
        return revision[:7], docstring_match.group(1).strip()

    return revision[:7], "Migration"


def sync_master_data_from_setup() -> None:
    """Sync the container type catalog from the setup file to the database."""
    with db.session() as session:
        setup_service = SetupService(session, ContainerTypeService(session))
        try:
            result = setup_service.sync_container_types_from_setup()
        except InvalidOperationException as e:
            # A broken catalog file must not block migrations
            session.rollback()
            print(f"⚠️  Failed to sync container types from setup file: {e.message}")
            return

        session.commit()
        if result.created > 0:
            print(f"📦 Added {result.created} new container types from setup file")
        else:
            print("📦 Container types already up to date")


def upgrade_database(recreate: bool = False) -> list[tuple[str, str]]:
    """Upgrade database with progress reporting.

    Args:
        recreate: If True, drop all tables first

    Returns:
        List of (revision, description) tuples for applied migrations
    """
    config = _get_alembic_config()
    applied_migrations: list[tuple[str, str]] = []

    if recreate:
        print("🗑️  Dropping all tables...")
        drop_all_tables()
        print("✅ All tables dropped")

    pending = get_pending_migrations()
    if not pending:
        return applied_migrations

    script = ScriptDirectory.from_config(config)

    with db.engine.begin() as connection:
        config.attributes["connection"] = connection

        for revision in pending:
            rev_short, description = _get_migration_info(script, revision)
            print(f"⚡ Applying schema {rev_short} - {description}")

            try:
                command.upgrade(config, revision)
            except Exception as e:
                print(f"❌ Failed to apply migration {rev_short}: {e}")
                raise

            applied_migrations.append((rev_short, description))
            logger.info(f"Applied migration {rev_short} - {description}")

    return applied_migrations
