from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def build_where(conditions: Sequence[Tuple[str, Sequence[Any]]]) -> Tuple[str, list]:
    """Join (clause, params) pairs with AND into a WHERE clause."""
    clauses = [c for c, _ in conditions]
    params: list = []
    for _, p in conditions:
        params.extend(p)
    if not clauses:
        return "", params
    return "WHERE " + " AND ".join(clauses), params


def search_condition(term: str, columns: Sequence[str]) -> Tuple[str, list]:
    """`(col1 LIKE %s OR col2 LIKE %s ...)` with the term wrapped in %...%."""
    pattern = f"%{term}%"
    clause = "(" + " OR ".join(f"{col} LIKE %s" for col in columns) + ")"
    return clause, [pattern] * len(columns)


def as_iso(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def as_float(value: Any) -> float:
    if value is None:
        return 0.0
    return float(value)
