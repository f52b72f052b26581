import re
from typing import List

from sqlalchemy import Integer, MetaData, Table, text
from sqlalchemy.engine import Connection
from sqlalchemy.schema import CreateTable

from dbsampler.database.drivers.base import DatabaseDriver
from dbsampler.logging import get_logger

logger = get_logger(__name__)

_NEXTVAL_PATTERN = re.compile(r"nextval\('([^']+)'(?:::regclass)?\)", re.I)


class PostgresDriver(DatabaseDriver):
    """PostgreSQL driver: reflection for tables, catalog functions for the rest."""

    name = "postgresql"

    def drop_table_sql(self, connection: Connection, table_name: str) -> str:
        return f"DROP TABLE IF EXISTS {self.quote(connection, table_name)} CASCADE"

    def drop_view_sql(self, connection: Connection, view_name: str) -> str:
        return f"DROP VIEW IF EXISTS {self.quote(connection, view_name)} CASCADE"

    def create_table_sql(self, connection: Connection, table_name: str) -> str:
        table = Table(table_name, MetaData(), autoload_with=connection)

        sequences = []
        for column in table.columns:
            default = column.server_default
            match = _NEXTVAL_PATTERN.search(str(default.arg)) if default else None
            if not match:
                continue
            if column is table.autoincrement_column:
                # Compiles to SERIAL, which creates and owns its own sequence
                column.server_default = None
            else:
                sequences.append(match.group(1))

        ddl = str(CreateTable(table).compile(dialect=connection.dialect)).strip()
        statements = [f"CREATE SEQUENCE IF NOT EXISTS {seq}" for seq in sequences]
        return ";\n".join(statements + [ddl])

    def create_view_sql(self, connection: Connection, view_name: str) -> str:
        definition = connection.execute(
            text("SELECT pg_get_viewdef(CAST(:name AS regclass), true)"),
            {"name": view_name},
        ).scalar()
        if definition is None:
            raise LookupError(f"No view named '{view_name}' in source database")
        return f"CREATE VIEW {self.quote(connection, view_name)} AS {definition}"

    def trigger_sqls(self, connection: Connection, table_name: str) -> List[str]:
        rows = connection.execute(
            text(
                "SELECT pg_get_triggerdef(t.oid) FROM pg_trigger t "
                "JOIN pg_class c ON c.oid = t.tgrelid "
                "WHERE c.relname = :table AND NOT t.tgisinternal ORDER BY t.tgname"
            ),
            {"table": table_name},
        )
        return [row[0] for row in rows]

    def finalize_table(self, connection: Connection, table: Table) -> None:
        quoted_table = self.quote(connection, table.name)
        for column in table.columns:
            if not isinstance(column.type, Integer):
                continue
            sequence = connection.execute(
                text("SELECT pg_get_serial_sequence(:table, :column)"),
                {"table": quoted_table, "column": column.name},
            ).scalar()
            if not sequence:
                continue

            quoted_column = self.quote(connection, column.name)
            connection.execute(
                text(
                    f"SELECT setval(:sequence, COALESCE(MAX({quoted_column}), 1), "
                    f"MAX({quoted_column}) IS NOT NULL) FROM {quoted_table}"
                ),
                {"sequence": sequence},
            )
            logger.debug(f"Reset sequence {sequence} for {table.name}.{column.name}")
