from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # The target database comes from settings, not from the script.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split on ';' outside quotes and drop '--' comment lines."""
    lines = [ln for ln in sql.splitlines() if not ln.strip().startswith("--")]
    buf: list[str] = []
    quote = ""
    for ch in "\n".join(lines):
        if ch in ("'", '"'):
            if not quote:
                quote = ch
            elif quote == ch:
                quote = ""
        if ch == ";" and not quote:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _open(db_config: dict, *, with_database: bool = True):
    return DatabaseConnection(DBConfig.from_dict(db_config)).connect(with_database=with_database)


def ensure_database_exists(db_config: dict) -> None:
    name = DBConfig.from_dict(db_config).database
    conn = _open(db_config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    """Create the database and the documents table; safe to rerun (IF NOT EXISTS)."""
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _open(db_config)
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied %s to %s", Path(schema_path).name, DBConfig.from_dict(db_config).database)


def list_tables(db_config: dict) -> list[str]:
    conn = _open(db_config)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
