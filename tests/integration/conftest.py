"""SQLite source databases for end-to-end migrations."""

import os
from typing import Generator, List

import pytest
from sqlalchemy import create_engine

SHOP_SCHEMA: List[str] = [
    "CREATE TABLE customers (id INTEGER PRIMARY KEY, name TEXT, email TEXT)",
    "CREATE TABLE orders (id INTEGER PRIMARY KEY, "
    "customer_id INTEGER REFERENCES customers(id), total INTEGER)",
    "CREATE TABLE orders_items (id INTEGER PRIMARY KEY, "
    "order_id INTEGER REFERENCES orders(id), sku TEXT)",
    "CREATE TABLE audit_log (id INTEGER PRIMARY KEY AUTOINCREMENT, message TEXT)",
    "CREATE VIEW customer_orders AS SELECT c.id AS customer_id, "
    "COUNT(o.id) AS order_count FROM customers c "
    "LEFT JOIN orders o ON o.customer_id = c.id GROUP BY c.id",
    "CREATE TRIGGER orders_audit AFTER INSERT ON orders BEGIN "
    "INSERT INTO audit_log (message) VALUES ('order ' || NEW.id); END",
]

SHOP_DATA: List[str] = [
    "INSERT INTO customers VALUES "
    "(1, 'Ann Smith', 'ann@shop.test'), (2, 'Bob Jones', 'bob@shop.test'), "
    "(3, 'Cat Brown', 'cat@shop.test'), (4, 'Dan Green', 'dan@shop.test')",
    "INSERT INTO orders VALUES "
    "(10, 1, 100), (11, 2, 250), (12, 3, 75), (13, 4, 20), (14, 1, 60)",
    "INSERT INTO orders_items VALUES "
    "(100, 10, 'A1'), (101, 10, 'B2'), (102, 11, 'A1'), (103, 12, 'C3'), "
    "(104, 13, 'A1'), (105, 14, 'D4')",
    "INSERT INTO audit_log (message) VALUES ('seeded')",
]


def sqlite_url(path: str) -> str:
    return f"sqlite:///{path}"


@pytest.fixture
def source_url(temp_dir) -> Generator[str, None, None]:
    """A populated shop database."""
    url = sqlite_url(os.path.join(temp_dir, "source.db"))
    engine = create_engine(url)
    with engine.connect() as connection:
        for statement in SHOP_SCHEMA + SHOP_DATA:
            connection.exec_driver_sql(statement)
        connection.commit()
    engine.dispose()
    yield url


@pytest.fixture
def destination_url(temp_dir) -> str:
    return sqlite_url(os.path.join(temp_dir, "destination.db"))


@pytest.fixture
def shop_tables():
    return {
        "customers": {
            "sampler": "limit",
            "limit": 2,
            "orderBy": "id",
            "remember": {"id": "customer_ids"},
            "cleanFields": {"name": "fakename", "email": "fakeemail"},
        },
        "orders": {
            "sampler": "matched",
            "constraints": {"customer_id": "$customer_ids"},
            "remember": {"id": "order_ids"},
        },
        "orders_items": {
            "sampler": "matched",
            "constraints": {"order_id": "$order_ids"},
        },
        "audit_log": {"sampler": "copyempty"},
    }
