"""Dialect drivers producing the SQL needed to copy schema objects.

The base driver relies on SQLAlchemy reflection alone, so it works with any
dialect SQLAlchemy can reflect. Dialect-specific drivers override the parts
where the database can hand back its own DDL verbatim.
"""

from typing import List

from sqlalchemy import MetaData, Table, inspect
from sqlalchemy.engine import Connection
from sqlalchemy.schema import CreateTable

from dbsampler.logging import get_logger

logger = get_logger(__name__)


class DatabaseDriver:
    """Generic, reflection based driver."""

    name = "generic"

    def session_setup_sql(self) -> List[str]:
        """Statements run once when a destination connection is opened."""
        return []

    def quote(self, connection: Connection, identifier: str) -> str:
        return connection.dialect.identifier_preparer.quote(identifier)

    def drop_table_sql(self, connection: Connection, table_name: str) -> str:
        return f"DROP TABLE IF EXISTS {self.quote(connection, table_name)}"

    def drop_view_sql(self, connection: Connection, view_name: str) -> str:
        return f"DROP VIEW IF EXISTS {self.quote(connection, view_name)}"

    def create_table_sql(self, connection: Connection, table_name: str) -> str:
        table = Table(table_name, MetaData(), autoload_with=connection)
        return str(CreateTable(table).compile(dialect=connection.dialect)).strip()

    def create_view_sql(self, connection: Connection, view_name: str) -> str:
        definition = inspect(connection).get_view_definition(view_name).strip()
        if definition.upper().startswith("CREATE"):
            return definition
        return f"CREATE VIEW {self.quote(connection, view_name)} AS {definition}"

    def trigger_sqls(self, connection: Connection, table_name: str) -> List[str]:
        raise NotImplementedError(
            f"Trigger migration is not supported for dialect '{connection.dialect.name}'"
        )

    def finalize_table(self, connection: Connection, table: Table) -> None:
        """Bring auto-increment state in line with rows written explicitly."""
