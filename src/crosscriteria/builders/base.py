"""Base query builder interface.

Defines the contract the criteria engine expects from an external query
builder. Builders only accumulate predicates; they never execute anything.
"""

from abc import ABC, abstractmethod
from typing import Any, List

__all__ = ("QueryBuilder",)


class QueryBuilder(ABC):
    """Abstract base class for query builders targeted by criteria.

    Subclasses translate qualified field references (``table.column``) and
    operator strings into their backend's native predicate representation.
    """

    @abstractmethod
    def get_table(self) -> str:
        """Return the table or alias name used to qualify field references."""
        raise NotImplementedError

    @abstractmethod
    def where_in(self, field: str, values: List[Any]) -> Any:
        """Add a membership predicate: ``field IN values``."""
        raise NotImplementedError

    @abstractmethod
    def where(self, field: str, operator: str, value: Any) -> Any:
        """Add a comparison predicate: ``field <operator> value``.

        - Comparison: =, !=, <, <=, >, >=
        - Pattern: like, ilike, not like, not ilike
        """
        raise NotImplementedError
