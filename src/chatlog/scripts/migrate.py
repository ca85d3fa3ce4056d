# src/chatlog/scripts/migrate.py
"""Apply the Alembic migrations to the configured database."""
from __future__ import annotations

import argparse
import os

from alembic import command
from alembic.config import Config

from chatlog.core.settings import settings

MIGRATIONS_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "..", "migrations")
)


def build_config(db_url: str | None = None) -> Config:
    """Return an Alembic config bound to ``db_url`` (the settings URL by default)."""
    cfg = Config(os.path.join(MIGRATIONS_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", MIGRATIONS_DIR)
    cfg.set_main_option("sqlalchemy.url", db_url or settings.database_url_sync)
    return cfg


def run_upgrade(revision: str = "head", *, db_url: str | None = None, sql: bool = False) -> None:
    command.upgrade(build_config(db_url), revision, sql=sql)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Upgrade the chatlog database schema")
    parser.add_argument("revision", nargs="?", default="head")
    parser.add_argument("--url", default=None, help="Database URL to migrate")
    parser.add_argument("--sql", action="store_true", help="Print the SQL instead of running it")
    args = parser.parse_args(argv)
    run_upgrade(args.revision, db_url=args.url, sql=args.sql)


if __name__ == "__main__":
    main()
