"""Pytest configuration and fixtures for criteria tests."""

from typing import Any, List, Tuple

import pytest
from dotenv import load_dotenv
from sqlalchemy import Column, Integer, MetaData, String, Table, create_engine, insert

from crosscriteria.builders.base import QueryBuilder

# Load environment variables
load_dotenv()


# In-memory builder for engine tests
class RecordingBuilder(QueryBuilder):
    """Records predicates instead of building a real query."""

    def __init__(self, table: str = "users") -> None:
        self.table = table
        self.predicates: List[Tuple[str, str, Any]] = []
        self.table_lookups = 0

    def get_table(self) -> str:
        self.table_lookups += 1
        return self.table

    def where_in(self, field: str, values: List[Any]) -> "RecordingBuilder":
        self.predicates.append(("in", field, list(values)))
        return self

    def where(self, field: str, operator: str, value: Any) -> "RecordingBuilder":
        self.predicates.append((operator, field, value))
        return self

    def fields(self) -> List[str]:
        return [field for _, field, _ in self.predicates]


@pytest.fixture
def builder():
    return RecordingBuilder()


@pytest.fixture
def make_builder():
    """Factory for recording builders bound to a given table name."""
    return RecordingBuilder


@pytest.fixture
def metadata():
    return MetaData()


@pytest.fixture
def users(metadata):
    return Table(
        "users",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("status", Integer),
        Column("name", String(50)),
        Column("age", Integer),
    )


@pytest.fixture
def orders(metadata, users):
    return Table(
        "orders",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("user_id", Integer),
        Column("status", Integer),
        Column("note", String(50)),
    )


@pytest.fixture
def sqlite_engine(metadata, users, orders):
    """In-memory SQLite seeded with a few users and orders."""
    engine = create_engine("sqlite://")
    metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(
            insert(users),
            [
                {"id": 1, "status": 1, "name": "Reishou", "age": 30},
                {"id": 2, "status": 2, "name": "REIKO", "age": 0},
                {"id": 3, "status": 3, "name": "Amelie", "age": 30},
                {"id": 4, "status": 3, "name": "50% off", "age": 41},
                {"id": 5, "status": 1, "name": "under_score", "age": 22},
            ],
        )
        conn.execute(
            insert(orders),
            [
                {"id": 10, "user_id": 1, "status": 2, "note": "first"},
                {"id": 11, "user_id": 3, "status": 1, "note": "second"},
            ],
        )
    yield engine
    engine.dispose()
