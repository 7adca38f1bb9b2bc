"""Query target handle passed to predicate builders and custom rules.

A `QueryTarget` pairs an external `QueryBuilder` with the table/alias name
resolved for it. The name is resolved once when the target is created, so a
single criteria application never asks the builder twice.
"""

from typing import Any, Iterable, Optional

from .builders.base import QueryBuilder

__all__ = ("QueryTarget",)


class QueryTarget:
    """Qualifies field names and forwards predicates to the wrapped builder."""

    def __init__(self, builder: QueryBuilder, table: Optional[str] = None) -> None:
        self._builder = builder
        self._table = table if table is not None else builder.get_table()

    @property
    def builder(self) -> QueryBuilder:
        return self._builder

    @property
    def table(self) -> str:
        return self._table

    def qualify(self, field: str) -> str:
        """Return ``table.field``; already qualified names and an empty table leave it as-is."""
        if "." in field or not self._table:
            return field
        return f"{self._table}.{field}"

    def where_in(self, field: str, values: Iterable[Any]) -> "QueryTarget":
        self._builder.where_in(self.qualify(field), list(values))
        return self

    def where(self, field: str, operator: str, value: Any) -> "QueryTarget":
        self._builder.where(self.qualify(field), operator, value)
        return self

    def __repr__(self) -> str:
        return f"<QueryTarget table={self._table!r} builder={self._builder.__class__.__name__}>"
