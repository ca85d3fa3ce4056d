"""Utility script to prepare the configured database."""
from __future__ import annotations

import argparse
import sys
from urllib.parse import urlsplit, urlunsplit

import psycopg
from psycopg import sql
from sqlalchemy import create_engine

from chatlog.core.settings import settings
from chatlog.db.session import Base


def normalize_to_psycopg(uri: str) -> str:
    """Return a Postgres URI suitable for psycopg.connect().

    Converts SQLAlchemy schemes (postgresql+*) to plain "postgresql".
    """
    uri = (uri or "").strip().strip("'\"")
    if not uri:
        raise ValueError("DATABASE_URL is empty")
    parts = urlsplit(uri)
    scheme = parts.scheme
    if scheme.startswith("postgresql+"):
        scheme = "postgresql"
    return urlunsplit((scheme, parts.netloc, parts.path, parts.query, parts.fragment))


def ensure_postgres_database(db_url: str) -> None:
    """Create the configured Postgres database if it is missing."""
    parts = urlsplit(normalize_to_psycopg(db_url))
    target_db = parts.path.lstrip("/") or "postgres"
    admin_url = urlunsplit(("postgresql", parts.netloc, "/postgres", parts.query, parts.fragment))

    with psycopg.connect(admin_url, autocommit=True) as conn, conn.cursor() as cur:
        cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (target_db,))
        if cur.fetchone() is None:
            cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(target_db)))
            print(f"[ensure_db] created database {target_db}")
        else:
            print(f"[ensure_db] database {target_db} already exists")


def create_schema(db_url: str, *, drop: bool = False) -> None:
    """Create every table of the ORM metadata, optionally dropping them first."""
    engine = create_engine(db_url)
    try:
        if drop:
            Base.metadata.drop_all(bind=engine)
            print("[ensure_db] dropped all tables")
        Base.metadata.create_all(bind=engine)
        print("[ensure_db] tables are present")
    finally:
        engine.dispose()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Ensure or reset the configured database")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop all tables before creating them again.",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to effective settings URL)",
    )
    args = parser.parse_args(argv)

    raw_url = args.url or settings.database_url_sync
    try:
        if raw_url.startswith("postgresql"):
            ensure_postgres_database(raw_url)
        create_schema(raw_url, drop=args.drop_tables)
    except Exception as exc:
        print(f"[ensure_db] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
