"""Tests for the schema management commands."""

from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect

from chatlog.scripts import ensure_db, migrate


def test_normalize_strips_driver_and_quotes() -> None:
    assert (
        ensure_db.normalize_to_psycopg("'postgresql+psycopg://u:p@db:5432/chat'")
        == "postgresql://u:p@db:5432/chat"
    )
    with pytest.raises(ValueError):
        ensure_db.normalize_to_psycopg("  ")


def test_ensure_db_creates_sqlite_tables(tmp_path: Path) -> None:
    url = f"sqlite:///{tmp_path / 'fresh.db'}"
    ensure_db.main(["--url", url])

    engine = create_engine(url)
    try:
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
    assert {"message", "message_counter", "message_range", "chat_session"} <= tables


def test_migrate_upgrades_to_head(mocker) -> None:  # type: ignore[no-untyped-def]
    upgrade = mocker.patch.object(migrate.command, "upgrade")

    migrate.main(["--url", "sqlite:///chat.db"])

    cfg, revision = upgrade.call_args.args
    assert revision == "head"
    assert upgrade.call_args.kwargs == {"sql": False}
    assert cfg.get_main_option("sqlalchemy.url") == "sqlite:///chat.db"
    assert cfg.get_main_option("script_location") == migrate.MIGRATIONS_DIR
