"""Migration runner tests against a throwaway SQLite file."""

from sqlalchemy import create_engine, inspect

from strix.migrations import pending_migrations, run_migrations


def test_run_migrations_creates_schema(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrations.db'}"

    assert pending_migrations(url) == ["5f2c1a9d3e71", "8b4e7d0c2a16"]
    assert run_migrations(url) == ["5f2c1a9d3e71", "8b4e7d0c2a16"]

    engine = create_engine(url)
    try:
        tables = set(inspect(engine).get_table_names())
        columns = {col["name"] for col in inspect(engine).get_columns("licitations")}
    finally:
        engine.dispose()
    assert {"users", "licitations", "alembic_version"} <= tables
    assert {"start_date", "end_date", "is_lowest_price", "user_id"} <= columns


def test_run_migrations_is_idempotent(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrations.db'}"
    run_migrations(url)

    assert pending_migrations(url) == []
    assert run_migrations(url) == []
