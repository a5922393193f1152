"""Alembic migrations, run automatically at application startup."""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
ALEMBIC_INI = PROJECT_ROOT / "alembic.ini"
SCRIPT_LOCATION = PROJECT_ROOT / "alembic"


def get_alembic_config(database_url: str) -> Config:
    """Build an Alembic config pointing at our scripts and the given database."""
    config = Config(str(ALEMBIC_INI)) if ALEMBIC_INI.exists() else Config()
    config.set_main_option("script_location", str(SCRIPT_LOCATION))
    # ConfigParser interpolation treats "%" specially (URL-encoded passwords).
    config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    config.attributes["configure_logging"] = False
    return config


def pending_migrations(database_url: str) -> list[str]:
    """Revisions not yet applied to the database, oldest first."""
    script = ScriptDirectory.from_config(get_alembic_config(database_url))
    engine = create_engine(database_url)
    try:
        with engine.connect() as connection:
            current_heads = MigrationContext.configure(connection).get_current_heads()
    finally:
        engine.dispose()

    applied = set()
    for head in current_heads:
        applied.update(revision.revision for revision in script.iterate_revisions(head, "base"))

    # walk_revisions goes from the heads down to base
    pending = [rev.revision for rev in script.walk_revisions() if rev.revision not in applied]
    return list(reversed(pending))


def run_migrations(database_url: str) -> list[str]:
    """Upgrade the database to head and return the revisions that were applied."""
    pending = pending_migrations(database_url)
    if not pending:
        logger.info("Database is up to date, no migrations needed.")
        return []

    logger.info(f"Running {len(pending)} pending migrations...")
    try:
        command.upgrade(get_alembic_config(database_url), "head")
    except Exception:
        logger.exception("Migration error")
        raise
    logger.info(f"Migrations completed successfully: {', '.join(pending)}")
    return pending
