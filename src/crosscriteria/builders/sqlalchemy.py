"""SQLAlchemy `Select` builder.

Applies criteria predicates to a SQLAlchemy Core/ORM ``Select`` statement.
Qualified field names (``table.column``) are resolved against the named FROM
elements of the statement (joins included), so predicates always reference
real columns instead of raw SQL text.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import Select, inspect
from sqlalchemy.sql.expression import ColumnElement, FromClause, Join

from crosscriteria.constants import LIKE_OPERATORS
from crosscriteria.exceptions import InvalidOperatorError

from .base import QueryBuilder

__all__ = ("SelectBuilder",)

# Maps builder operators to SQLAlchemy column methods
OPERATOR_MAP = {
    "=": "__eq__",
    "!=": "__ne__",
    ">": "__gt__",
    ">=": "__ge__",
    "<": "__lt__",
    "<=": "__le__",
    "like": "like",
    "not like": "not_like",
    "ilike": "ilike",
    "not ilike": "not_ilike",
}


def _as_from_clause(entity: Any) -> FromClause:
    """Return the selectable behind a Table, alias, ORM class or aliased() entity."""
    if isinstance(entity, FromClause):
        return entity
    return inspect(entity).selectable


def _flatten(from_clause: FromClause) -> List[FromClause]:
    if isinstance(from_clause, Join):
        return _flatten(from_clause.left) + _flatten(from_clause.right)
    return [from_clause]


class SelectBuilder(QueryBuilder):
    """Accumulate WHERE predicates on a ``Select`` statement.

    ``Select`` is immutable; every predicate replaces ``self.statement`` with
    the new statement, which callers read back after criteria are applied.

    Args:
        statement: the statement to filter
        table: optional Table, alias or ORM entity whose name qualifies fields;
            defaults to the left-most FROM element of ``statement``
        escape: escape character passed to LIKE/ILIKE
    """

    def __init__(self, statement: Select, table: Any = None, *, escape: Optional[str] = "\\") -> None:
        self.statement = statement
        self.escape = escape
        self._table = _as_from_clause(table) if table is not None else None

    def _named_froms(self) -> Dict[str, FromClause]:
        named: Dict[str, FromClause] = {}
        candidates: List[FromClause] = [self._table] if self._table is not None else []
        for from_clause in self.statement.get_final_froms():
            candidates.extend(_flatten(from_clause))
        for from_clause in candidates:
            name = getattr(from_clause, "name", None)
            if name and name not in named:
                named[str(name)] = from_clause
        return named

    def _primary(self) -> FromClause:
        if self._table is not None:
            return self._table
        froms = self.statement.get_final_froms()
        if not froms:
            raise KeyError("Statement has no FROM element to filter")
        return _flatten(froms[0])[0]

    def get_table(self) -> str:
        return str(getattr(self._primary(), "name", "") or "")

    def column(self, field: str) -> ColumnElement:
        """Resolve ``table.column`` (or a bare column of the primary table).

        Raises:
            KeyError: unknown table or column
        """
        table_name, _, column_name = field.rpartition(".")
        if not table_name:
            return self._primary().c[column_name]
        named = self._named_froms()
        if table_name not in named:
            raise KeyError(f"Table {table_name!r} is not part of the statement")
        return named[table_name].c[column_name]

    def where_in(self, field: str, values: List[Any]) -> "SelectBuilder":
        self.statement = self.statement.where(self.column(field).in_(values))
        return self

    def where(self, field: str, operator: str, value: Any) -> "SelectBuilder":
        op = operator.strip().lower()
        method = OPERATOR_MAP.get(op)
        if method is None:
            raise InvalidOperatorError(
                f"Operator {operator!r} is not supported. Supported: {', '.join(sorted(OPERATOR_MAP))}",
                field=field,
                operator=operator,
            )
        column = self.column(field)
        if op in LIKE_OPERATORS:
            clause = getattr(column, method)(value, escape=self.escape)
        else:
            clause = getattr(column, method)(value)
        self.statement = self.statement.where(clause)
        return self
