"""Fakes for the source and destination database capabilities."""

from typing import Any, Dict, List, Optional

import pytest

from dbsampler.references import ReferenceStore
from dbsampler.spec import MigrationSpec


class MockTableSource:
    """In-memory rows for one table, filtered like SourceDatabase.fetch_rows."""

    def __init__(self, rows: List[Dict[str, Any]]):
        self.rows = rows
        self.calls: List[Dict[str, Any]] = []

    def fetch(self, match=None, where=None, order_by=None, limit=None):
        self.calls.append(
            {"match": match, "where": where, "order_by": order_by, "limit": limit}
        )
        rows = [
            dict(row)
            for row in self.rows
            if all(row.get(column) in values for column, values in (match or {}).items())
        ]
        for term in reversed(order_by or []):
            column, _, direction = term.partition(" ")
            rows.sort(key=lambda row: row[column], reverse=direction.upper() == "DESC")
        if limit is not None:
            rows = rows[:limit]
        return rows


class MockSourceDatabase:
    """Source side keyed by table name; records the tables it was asked for."""

    def __init__(
        self,
        tables: Dict[str, List[Dict[str, Any]]],
        triggers: Optional[Dict[str, List[str]]] = None,
        dialect_name: str = "sqlite",
    ):
        self.tables = tables
        self.triggers = triggers or {}
        self.dialect_name = dialect_name
        self.sampled: List[str] = []
        self.failing_tables: Dict[str, Exception] = {}
        self.failing_triggers: Dict[str, Exception] = {}

    def table_source(self, table_name: str) -> MockTableSource:
        self.sampled.append(table_name)
        if table_name in self.failing_tables:
            raise self.failing_tables[table_name]
        return MockTableSource(self.tables.get(table_name, []))

    def get_table_definition(self, table_name: str) -> str:
        return f"CREATE TABLE {table_name} (...)"

    def get_view_definition(self, view_name: str) -> str:
        return f"CREATE VIEW {view_name} AS SELECT 1"

    def get_triggers_definition(self, table_name: str) -> List[str]:
        if table_name in self.failing_triggers:
            raise self.failing_triggers[table_name]
        return list(self.triggers.get(table_name, []))


class MockDestinationDatabase:
    """Destination side recording every operation in call order."""

    def __init__(self, dialect_name: str = "sqlite"):
        self.dialect_name = dialect_name
        self.calls: List[tuple] = []
        self.rows: Dict[str, List[Dict[str, Any]]] = {}

    def drop_table(self, table_name):
        self.calls.append(("drop_table", table_name))
        self.rows.pop(table_name, None)

    def create_table(self, definition):
        self.calls.append(("create_table", definition))

    def drop_view(self, view_name):
        self.calls.append(("drop_view", view_name))

    def create_view(self, definition):
        self.calls.append(("create_view", definition))

    def migrate_table_triggers(self, triggers):
        for trigger in triggers:
            self.calls.append(("create_trigger", trigger))

    def insert_rows(self, table_name, rows):
        self.calls.append(("insert_rows", table_name, len(rows)))
        self.rows.setdefault(table_name, []).extend(rows)

    def execute_sql(self, statement):
        self.calls.append(("execute_sql", statement))

    def finalize_table(self, table_name):
        self.calls.append(("finalize_table", table_name))

    def calls_named(self, name: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == name]


@pytest.fixture
def reference_store() -> ReferenceStore:
    return ReferenceStore()


@pytest.fixture
def make_spec():
    """Build a MigrationSpec from keyword configuration."""

    def _make_spec(table: str = "customers", **config) -> MigrationSpec:
        config.setdefault("sampler", "copyall")
        return MigrationSpec.from_dict(table, config)

    return _make_spec


@pytest.fixture
def make_table_source():
    return MockTableSource


@pytest.fixture
def make_source():
    return MockSourceDatabase


@pytest.fixture
def destination() -> MockDestinationDatabase:
    return MockDestinationDatabase()
