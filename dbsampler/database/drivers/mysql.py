import re
from typing import List

from sqlalchemy import text
from sqlalchemy.engine import Connection

from dbsampler.database.drivers.base import DatabaseDriver

# Views carry the account that created them, which rarely exists on the destination
_DEFINER_PATTERN = re.compile(r"\s+DEFINER\s*=\s*(`[^`]*`|\S+)@(`[^`]*`|\S+)", re.I)


class MysqlDriver(DatabaseDriver):
    """MySQL / MariaDB driver using SHOW CREATE and information_schema."""

    name = "mysql"

    def session_setup_sql(self) -> List[str]:
        return ["SET FOREIGN_KEY_CHECKS = 0"]

    def create_table_sql(self, connection: Connection, table_name: str) -> str:
        row = connection.exec_driver_sql(
            f"SHOW CREATE TABLE {self.quote(connection, table_name)}"
        ).one()
        return row[1]

    def create_view_sql(self, connection: Connection, view_name: str) -> str:
        row = connection.exec_driver_sql(
            f"SHOW CREATE VIEW {self.quote(connection, view_name)}"
        ).one()
        return _DEFINER_PATTERN.sub("", row[1], count=1)

    def trigger_sqls(self, connection: Connection, table_name: str) -> List[str]:
        rows = connection.execute(
            text(
                "SELECT TRIGGER_NAME, ACTION_TIMING, EVENT_MANIPULATION, "
                "ACTION_STATEMENT FROM information_schema.TRIGGERS "
                "WHERE EVENT_OBJECT_SCHEMA = DATABASE() "
                "AND EVENT_OBJECT_TABLE = :table ORDER BY ACTION_ORDER"
            ),
            {"table": table_name},
        )
        table = self.quote(connection, table_name)
        return [
            f"CREATE TRIGGER {self.quote(connection, name)} {timing} {event} "
            f"ON {table} FOR EACH ROW {statement}"
            for name, timing, event, statement in rows
        ]
