from typing import Dict, Type

from dbsampler.database.drivers.base import DatabaseDriver
from dbsampler.database.drivers.mysql import MysqlDriver
from dbsampler.database.drivers.postgresql import PostgresDriver
from dbsampler.database.drivers.sqlite import SqliteDriver

DRIVERS: Dict[str, Type[DatabaseDriver]] = {
    "sqlite": SqliteDriver,
    "mysql": MysqlDriver,
    "mariadb": MysqlDriver,
    "postgresql": PostgresDriver,
}


def get_driver(dialect_name: str) -> DatabaseDriver:
    """Return the driver for a SQLAlchemy dialect name, generic if unknown."""
    return DRIVERS.get(dialect_name, DatabaseDriver)()


__all__ = [
    "DRIVERS",
    "DatabaseDriver",
    "MysqlDriver",
    "PostgresDriver",
    "SqliteDriver",
    "get_driver",
]
