from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

_CREATE_DB_OR_USE = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$")


def split_sql_statements(sql: str) -> Iterator[str]:
    """Split a schema/seed script on ``;`` outside of quoted strings."""

    start = 0
    quote: str | None = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if ch == "\\":
            i += 2
            continue
        if quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


def _run_script(conn_factory: DatabaseConnection, sql: str) -> None:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in split_sql_statements(_CREATE_DB_OR_USE.sub("", sql)):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(config: DBConfig) -> None:
    conn = DatabaseConnection(config).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    """Create the database and tables (idempotent: every statement is IF NOT EXISTS)."""

    config = DBConfig.from_dict(db_config)
    ensure_database_exists(config)
    _run_script(DatabaseConnection(config), Path(schema_path).read_text(encoding="utf-8"))
    logger.info("Schema applied from %s to %s", schema_path, config.database)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    config = DBConfig.from_dict(db_config)
    _run_script(DatabaseConnection(config), Path(seed_path).read_text(encoding="utf-8"))
    logger.info("Seed data applied from %s", seed_path)


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
