from .base import QueryBuilder
from .sql import SqlWhereBuilder, quote_identifier
from .sqlalchemy import SelectBuilder

__all__ = (
    "QueryBuilder",
    "SelectBuilder",
    "SqlWhereBuilder",
    "quote_identifier",
)
