from typing import Any, Dict, Iterable, List

from sqlalchemy.engine import Connection

from dbsampler.database.base import Database
from dbsampler.logging import get_logger

logger = get_logger(__name__)


class DestinationDatabase(Database):
    """Write side: schema objects and sampled rows.

    Each operation commits on completion so a failed run leaves every
    previously migrated table intact. A failed statement is rolled back
    so the connection stays usable for the next one.
    """

    def _on_connect(self, connection: Connection) -> None:
        for statement in self.driver.session_setup_sql():
            connection.exec_driver_sql(statement)
        connection.commit()

    def _execute_ddl(self, statement: str) -> None:
        with self.rollback_on_error() as connection:
            connection.exec_driver_sql(statement)
            connection.commit()

    def drop_table(self, table_name: str) -> None:
        self.forget_table(table_name)
        self._execute_ddl(self.driver.drop_table_sql(self.connection, table_name))

    def create_table(self, table_definition: str) -> None:
        self._execute_ddl(table_definition)

    def drop_view(self, view_name: str) -> None:
        self._execute_ddl(self.driver.drop_view_sql(self.connection, view_name))

    def create_view(self, view_definition: str) -> None:
        self._execute_ddl(view_definition)

    def migrate_table_triggers(self, trigger_definitions: Iterable[str]) -> None:
        for trigger_sql in trigger_definitions:
            self._execute_ddl(trigger_sql)

    def execute_sql(self, statement: str) -> None:
        """Run an arbitrary statement, e.g. configured post-import SQL."""
        self._execute_ddl(statement)

    def insert_row(self, table_name: str, row: Dict[str, Any]) -> None:
        self.insert_rows(table_name, [row])

    def insert_rows(self, table_name: str, rows: List[Dict[str, Any]]) -> None:
        if not rows:
            return
        table = self.get_table(table_name)
        with self.rollback_on_error() as connection:
            connection.execute(table.insert(), rows)
            connection.commit()
        logger.debug(f"Inserted {len(rows)} rows into {table_name}")

    def finalize_table(self, table_name: str) -> None:
        table = self.get_table(table_name)
        with self.rollback_on_error() as connection:
            self.driver.finalize_table(connection, table)
            connection.commit()
