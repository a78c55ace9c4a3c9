from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator, List, Union

from ..core.logging import get_logger
from .connection import DatabaseConnection

log = get_logger(__name__)

PAYROLL_TABLES = (
    "users",
    "employees",
    "employee_accounts",
    "employee_banking_details",
    "payslips",
    "api_sessions",
)

_DATABASE_LINE = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;\s*$")
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")


def schema_statements(sql: str) -> Iterator[str]:
    """Yield the table statements of a schema dump.

    Database selection lines are dropped so the configured database wins.
    Semicolons inside quoted literals do not end a statement.
    """
    sql = _LINE_COMMENT.sub("", _DATABASE_LINE.sub("", sql))
    current: List[str] = []
    quote = ""
    prev = ""
    for ch in sql:
        if quote:
            if ch == quote and prev != "\\":
                quote = ""
        elif ch in ("'", '"', "`"):
            quote = ch
        elif ch == ";":
            stmt = "".join(current).strip()
            current = []
            prev = ch
            if stmt:
                yield stmt
            continue
        current.append(ch)
        prev = ch
    stmt = "".join(current).strip()
    if stmt:
        yield stmt


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: Union[str, Path]) -> int:
    """Create the database and every table in `schema_path`; returns the statement count."""
    ensure_database_exists(conn_factory)
    statements = list(schema_statements(Path(schema_path).read_text(encoding="utf-8")))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    log.info("schema_applied", database=conn_factory.config.database, statements=len(statements))
    return len(statements)


def list_tables(conn_factory: DatabaseConnection) -> List[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def missing_tables(conn_factory: DatabaseConnection) -> List[str]:
    present = set(list_tables(conn_factory))
    return [t for t in PAYROLL_TABLES if t not in present]
