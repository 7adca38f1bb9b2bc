"""Parameterized SQL WHERE builder.

Accumulates predicates into a SQL WHERE clause with psycopg-style named
placeholders (``%(p0)s``). Values are never embedded in the SQL text.

Supports:
- Comparison: =, !=, >, <, >=, <=
- Range: IN
- String: LIKE, ILIKE (or LOWER(..) LIKE LOWER(..) where ILIKE is missing)
"""

from typing import Any, Dict, List, Optional, Tuple

from crosscriteria.exceptions import InvalidOperatorError

from .base import QueryBuilder

__all__ = (
    "SqlWhereBuilder",
    "quote_identifier",
)


def quote_identifier(name: str) -> str:
    """Quote SQL identifier with double quotes.

    Handles dotted field paths by quoting each segment separately.
    """
    return ".".join('"' + part.replace('"', '""') + '"' for part in name.split("."))


class SqlWhereBuilder(QueryBuilder):
    """Build a parameterized WHERE clause against a single table or alias.

    Example:
        >>> builder = SqlWhereBuilder("users").where_in("users.status", [1, 3])
        >>> builder.to_sql()
        ('"users"."status" IN (%(p0)s, %(p1)s)', {'p0': 1, 'p1': 3})
    """

    _OP_MAP = {
        "=": "=",
        "!=": "!=",
        ">": ">",
        ">=": ">=",
        "<": "<",
        "<=": "<=",
        "like": "LIKE",
        "not like": "NOT LIKE",
        "ilike": "ILIKE",
        "not ilike": "NOT ILIKE",
    }

    def __init__(self, table: str, *, supports_ilike: bool = True, escape: Optional[str] = "\\") -> None:
        self.table = table
        self.supports_ilike = supports_ilike
        self.escape = escape
        self.conditions: List[str] = []
        self.params: Dict[str, Any] = {}

    def get_table(self) -> str:
        return self.table

    def _bind(self, value: Any) -> str:
        name = f"p{len(self.params)}"
        self.params[name] = value
        return f"%({name})s"

    def where_in(self, field: str, values: List[Any]) -> "SqlWhereBuilder":
        if not values:
            # IN () is invalid SQL; an empty set matches nothing
            self.conditions.append("1 = 0")
            return self
        placeholders = ", ".join(self._bind(v) for v in values)
        self.conditions.append(f"{quote_identifier(field)} IN ({placeholders})")
        return self

    def where(self, field: str, operator: str, value: Any) -> "SqlWhereBuilder":
        op = operator.strip().lower()
        if op not in self._OP_MAP:
            raise InvalidOperatorError(
                f"Operator {operator!r} is not supported. Supported: {', '.join(sorted(self._OP_MAP))}",
                field=field,
                operator=operator,
            )
        ident = quote_identifier(field)
        placeholder = self._bind(value)
        if op in ("ilike", "not ilike") and not self.supports_ilike:
            negate = "NOT " if op.startswith("not") else ""
            condition = f"LOWER({ident}) {negate}LIKE LOWER({placeholder})"
        else:
            condition = f"{ident} {self._OP_MAP[op]} {placeholder}"
        if "like" in op and self.escape:
            condition += " ESCAPE '" + self.escape.replace("'", "''") + "'"
        self.conditions.append(condition)
        return self

    def to_sql(self) -> Tuple[str, Dict[str, Any]]:
        """Return ``(clause, params)``; an empty clause means no predicates."""
        return " AND ".join(self.conditions), dict(self.params)

    def __str__(self) -> str:
        return self.to_sql()[0]
