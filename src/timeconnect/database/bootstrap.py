from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside of quoted strings."""
    buf: list[str] = []
    quote: str | None = None
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
            continue
        if ch == "\\":
            escape = True
            continue
        if quote:
            if ch == quote:
                quote = None
            continue
        if ch in ("'", '"'):
            quote = ch
            continue
        if ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    database = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path = SCHEMA_PATH) -> int:
    ensure_database_exists(conn_factory)

    sql = Path(schema_path).read_text(encoding="utf-8")
    conn = conn_factory.connect()
    applied = 0
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            applied += 1
        conn.commit()
    finally:
        conn.close()

    logger.info("Schema ready (%d statements applied to %s)", applied, conn_factory.config.database)
    return applied
