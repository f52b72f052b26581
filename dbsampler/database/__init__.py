from dbsampler.database.base import Database
from dbsampler.database.connection import (
    build_connection_url,
    create_database_engine,
    translate_connection_parameters,
)
from dbsampler.database.destination import DestinationDatabase
from dbsampler.database.source import SourceDatabase, TableSource

__all__ = [
    "Database",
    "DestinationDatabase",
    "SourceDatabase",
    "TableSource",
    "build_connection_url",
    "create_database_engine",
    "translate_connection_parameters",
]
