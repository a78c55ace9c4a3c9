from pathlib import Path

from payroll_api.database.bootstrap import PAYROLL_TABLES, schema_statements

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_database_lines_and_comments_are_dropped():
    sql = """
    CREATE DATABASE IF NOT EXISTS other_db;
    USE other_db;
    -- users
    CREATE TABLE a (id INT);
    CREATE TABLE b (note VARCHAR(10) DEFAULT 'x;y');
    """
    assert list(schema_statements(sql)) == [
        "CREATE TABLE a (id INT)",
        "CREATE TABLE b (note VARCHAR(10) DEFAULT 'x;y')",
    ]


def test_bundled_schema_creates_every_table():
    statements = list(schema_statements(SCHEMA.read_text(encoding="utf-8")))
    created = " ".join(statements)
    assert len(statements) == len(PAYROLL_TABLES)
    for table in PAYROLL_TABLES:
        assert f"CREATE TABLE IF NOT EXISTS {table} " in created
