from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select, text

from dbsampler.database.base import Database
from dbsampler.errors import ConfigurationError

Row = Dict[str, Any]


class SourceDatabase(Database):
    """Read side: schema definitions and sampled rows."""

    def get_table_definition(self, table_name: str) -> str:
        with self.rollback_on_error() as connection:
            return self.driver.create_table_sql(connection, table_name)

    def get_view_definition(self, view_name: str) -> str:
        with self.rollback_on_error() as connection:
            return self.driver.create_view_sql(connection, view_name)

    def get_triggers_definition(self, table_name: str) -> List[str]:
        with self.rollback_on_error() as connection:
            return self.driver.trigger_sqls(connection, table_name)

    def fetch_rows(
        self,
        table_name: str,
        match: Optional[Dict[str, Iterable[Any]]] = None,
        where: Optional[List[str]] = None,
        order_by: Optional[List[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Row]:
        """Select rows from a table.

        Args:
            table_name: Table to read
            match: Column -> allowed values; a row must match every column
            where: Raw SQL conditions, all of which must hold
            order_by: Raw ORDER BY terms, e.g. "id DESC"
            limit: Maximum number of rows

        Returns:
            Rows as dicts keyed by column name, in result order

        Raises:
            ConfigurationError: If a match column does not exist
        """
        table = self.get_table(table_name)
        statement = select(table)

        for column, values in (match or {}).items():
            if column not in table.c:
                raise ConfigurationError(
                    f"Column '{column}' does not exist", table=table_name
                )
            statement = statement.where(table.c[column].in_(list(values)))

        for condition in where or []:
            statement = statement.where(text(condition))

        for term in order_by or []:
            statement = statement.order_by(text(term))

        if limit is not None:
            statement = statement.limit(limit)

        with self.rollback_on_error() as connection:
            result = connection.execute(statement)
            return [dict(row) for row in result.mappings()]

    def table_source(self, table_name: str) -> "TableSource":
        return TableSource(self, table_name)


class TableSource:
    """Row fetching scoped to a single source table."""

    def __init__(self, database: SourceDatabase, table_name: str):
        self.database = database
        self.table_name = table_name

    def fetch(
        self,
        match: Optional[Dict[str, Iterable[Any]]] = None,
        where: Optional[List[str]] = None,
        order_by: Optional[List[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Row]:
        return self.database.fetch_rows(
            self.table_name, match=match, where=where, order_by=order_by, limit=limit
        )
