#!/usr/bin/env python3
"""Scaffold a new Alembic migration.

Usage:
    python scripts/create_migration.py create-bids-table
    python scripts/create_migration.py add-status-column --autogenerate
"""

import argparse
import os
import re
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from alembic import command

from strix.config import get_settings
from strix.migrations import get_alembic_config


def slugify(name: str) -> str:
    """Normalize a migration name: lowercase words joined by underscores."""
    return re.sub(r"[\s\-]+", "_", name.strip().lower())


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a new migration file")
    parser.add_argument("name", help="migration name, e.g. create-users-table")
    parser.add_argument(
        "--autogenerate",
        action="store_true",
        help="diff the models against the database to fill in the migration",
    )
    args = parser.parse_args()

    message = slugify(args.name)
    if not message:
        parser.error("Please provide a migration name")

    config = get_alembic_config(get_settings().database_url)
    script = command.revision(config, message=message, autogenerate=args.autogenerate)
    print(f"Created migration: {script.path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
