from typing import List

from sqlalchemy import text
from sqlalchemy.engine import Connection

from dbsampler.database.drivers.base import DatabaseDriver


class SqliteDriver(DatabaseDriver):
    """SQLite keeps the original DDL of every object in sqlite_master."""

    name = "sqlite"

    def session_setup_sql(self) -> List[str]:
        return ["PRAGMA foreign_keys = OFF"]

    def _master_sql(self, connection: Connection, object_type: str, name: str) -> str:
        sql = connection.execute(
            text(
                "SELECT sql FROM sqlite_master WHERE type = :type AND name = :name"
            ),
            {"type": object_type, "name": name},
        ).scalar()
        if sql is None:
            raise LookupError(f"No {object_type} named '{name}' in source database")
        return sql

    def create_table_sql(self, connection: Connection, table_name: str) -> str:
        return self._master_sql(connection, "table", table_name)

    def create_view_sql(self, connection: Connection, view_name: str) -> str:
        return self._master_sql(connection, "view", view_name)

    def trigger_sqls(self, connection: Connection, table_name: str) -> List[str]:
        rows = connection.execute(
            text(
                "SELECT sql FROM sqlite_master "
                "WHERE type = 'trigger' AND tbl_name = :name ORDER BY name"
            ),
            {"name": table_name},
        )
        return [row[0] for row in rows if row[0]]
