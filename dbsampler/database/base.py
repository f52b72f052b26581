from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from sqlalchemy import MetaData, Table
from sqlalchemy.engine import Connection, Engine

from dbsampler.database.drivers import DatabaseDriver, get_driver
from dbsampler.logging import get_logger

logger = get_logger(__name__)


class Database:
    """One side of a migration: an engine and the single connection used on it."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.driver: DatabaseDriver = get_driver(engine.dialect.name)
        self._connection: Optional[Connection] = None
        self._metadata = MetaData()
        self._tables: Dict[str, Table] = {}

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    @property
    def connection(self) -> Connection:
        if self._connection is None:
            self._connection = self.engine.connect()
            self._on_connect(self._connection)
            logger.debug(
                f"{self.__class__.__name__}: connected using driver '{self.driver.name}'"
            )
        return self._connection

    def _on_connect(self, connection: Connection) -> None:
        """Hook for per-connection session setup."""

    @contextmanager
    def rollback_on_error(self) -> Iterator[Connection]:
        """Yield the connection, rolling back if the block fails."""
        connection = self.connection
        try:
            yield connection
        except Exception:
            connection.rollback()
            raise

    def get_table(self, table_name: str) -> Table:
        """Reflect a table, caching the result."""
        if table_name not in self._tables:
            self._tables[table_name] = Table(
                table_name,
                self._metadata,
                autoload_with=self.connection,
                resolve_fks=False,
            )
        return self._tables[table_name]

    def forget_table(self, table_name: str) -> None:
        """Drop cached reflection, e.g. after the table was recreated."""
        table = self._tables.pop(table_name, None)
        if table is not None:
            self._metadata.remove(table)

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        self.engine.dispose()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
