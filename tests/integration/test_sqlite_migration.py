"""End-to-end migrations between two SQLite databases."""

import pytest
from sqlalchemy import create_engine

from dbsampler.database import (
    DestinationDatabase,
    SourceDatabase,
    create_database_engine,
)
from dbsampler.errors import TableMigrationError
from dbsampler.migrator import Migrator
from dbsampler.spec import MigrationSet


def query(url, sql):
    engine = create_engine(url)
    try:
        with engine.connect() as connection:
            return [tuple(row) for row in connection.exec_driver_sql(sql)]
    finally:
        engine.dispose()


def run_migration(source_url, destination_url, migration_set):
    source = SourceDatabase(create_database_engine(source_url))
    destination = DestinationDatabase(create_database_engine(destination_url))
    with source, destination:
        return Migrator(source, destination).execute(migration_set)


@pytest.fixture
def shop_set(shop_tables):
    return MigrationSet.from_dict("shop", shop_tables, views=["customer_orders"])


class TestSqliteMigration:
    """Test a complete shop sample from file to file."""

    def test_reference_consistent_subset_is_copied(
        self, source_url, destination_url, shop_set
    ):
        result = run_migration(source_url, destination_url, shop_set)

        assert result.tables == {
            "customers": 2,
            "orders": 3,
            "orders_items": 4,
            "audit_log": 0,
        }
        assert query(destination_url, "SELECT id FROM customers ORDER BY id") == [
            (1,),
            (2,),
        ]
        assert query(destination_url, "SELECT id FROM orders ORDER BY id") == [
            (10,),
            (11,),
            (14,),
        ]
        assert query(
            destination_url, "SELECT id FROM orders_items ORDER BY id"
        ) == [(100,), (101,), (102,), (105,)]

    def test_cleaned_columns_are_anonymised(
        self, source_url, destination_url, shop_set
    ):
        run_migration(source_url, destination_url, shop_set)

        rows = query(destination_url, "SELECT name, email FROM customers ORDER BY id")
        assert all(email.endswith("@example.com") for _, email in rows)
        assert ("Ann Smith", "ann@shop.test") not in rows

    def test_schema_views_and_triggers_are_recreated(
        self, source_url, destination_url, shop_set
    ):
        run_migration(source_url, destination_url, shop_set)

        objects = query(
            destination_url,
            "SELECT type, name FROM sqlite_master "
            "WHERE name IN ('customer_orders', 'orders_audit')",
        )
        assert sorted(objects) == [
            ("trigger", "orders_audit"),
            ("view", "customer_orders"),
        ]
        assert query(destination_url, "SELECT * FROM audit_log") == []
        assert query(
            destination_url,
            "SELECT customer_id, order_count FROM customer_orders ORDER BY 1",
        ) == [(1, 2), (2, 1)]

    def test_trigger_is_not_fired_by_copied_rows(
        self, source_url, destination_url, shop_set
    ):
        run_migration(source_url, destination_url, shop_set)

        engine = create_engine(destination_url)
        with engine.connect() as connection:
            connection.exec_driver_sql("INSERT INTO orders VALUES (99, 1, 5)")
            connection.commit()
        engine.dispose()

        assert query(destination_url, "SELECT message FROM audit_log") == [
            ("order 99",)
        ]

    def test_rerun_replaces_destination_tables(
        self, source_url, destination_url, shop_set
    ):
        run_migration(source_url, destination_url, shop_set)
        result = run_migration(source_url, destination_url, shop_set)

        assert result.total_rows == 9
        assert query(destination_url, "SELECT COUNT(*) FROM orders") == [(3,)]

    def test_child_table_before_its_parent(self, source_url, destination_url):
        """Test foreign key parents need not exist when a child is copied."""
        migration_set = MigrationSet.from_dict(
            "shop", {"orders_items": {}, "orders": None, "customers": {}}
        )

        result = run_migration(source_url, destination_url, migration_set)

        assert result.table_order == ["orders_items", "orders", "customers"]
        assert result.tables == {"orders_items": 6, "orders": 5, "customers": 4}
        assert query(
            destination_url,
            "SELECT COUNT(*) FROM orders_items i JOIN orders o ON o.id = i.order_id",
        ) == [(6,)]

    def test_child_without_parent_in_destination(self, source_url, destination_url):
        """Test a child is copied even when its parent is outside the set."""
        migration_set = MigrationSet.from_dict("shop", {"orders": {}})

        result = run_migration(source_url, destination_url, migration_set)

        assert result.tables == {"orders": 5}
        assert query(
            destination_url,
            "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name",
        ) == [("orders",)]

    def test_post_import_sql_runs(self, source_url, destination_url, shop_tables):
        shop_tables["orders"]["postImportSql"] = "UPDATE orders SET total = 0"
        migration_set = MigrationSet.from_dict("shop", shop_tables)

        run_migration(source_url, destination_url, migration_set)

        assert query(destination_url, "SELECT DISTINCT total FROM orders") == [(0,)]

    def test_small_batches_copy_every_row(
        self, source_url, destination_url, shop_tables
    ):
        migration_set = MigrationSet.from_dict("shop", shop_tables, batch_size=1)
        result = run_migration(source_url, destination_url, migration_set)
        assert result.tables["orders_items"] == 4

    def test_failed_table_aborts_before_later_tables(
        self, source_url, destination_url, shop_tables
    ):
        shop_tables["orders"]["where"] = "no_such_column = 1"
        migration_set = MigrationSet.from_dict("shop", shop_tables)

        with pytest.raises(TableMigrationError) as exc_info:
            run_migration(source_url, destination_url, migration_set)

        assert exc_info.value.table == "orders"
        tables = query(
            destination_url, "SELECT name FROM sqlite_master WHERE type = 'table'"
        )
        assert ("customers",) in tables
        assert ("orders_items",) not in tables
