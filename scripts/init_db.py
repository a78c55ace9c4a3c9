from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

from payroll_api.database.bootstrap import apply_schema, missing_tables
from payroll_api.database.connection import DBConfig, DatabaseConnection
from payroll_api.settings import load_settings
from payroll_api.users.mysql_user_repository import MySQLUserRepository
from payroll_api.users.service import AuthService

SCHEMA_PATH = Path(__file__).resolve().parents[1] / "database" / "schema.sql"


def main() -> int:
    load_dotenv(override=False)
    settings = load_settings()
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(settings.db_config))

    statements = apply_schema(conn, schema_path=SCHEMA_PATH)
    missing = missing_tables(conn)
    if missing:
        print(f"FAILED: {conn.config.describe()} is missing tables: {', '.join(missing)}")
        return 1

    created = AuthService(MySQLUserRepository(conn)).ensure_initial_admin()
    print(
        f"OK: applied {statements} statements to {conn.config.describe()} "
        f"(initial admin {'created' if created else 'already present'})"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
