"""Type aliases for crosscriteria package.

This module provides reusable type definitions to ensure consistency
across the codebase and improve code readability.
"""

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Sequence, Tuple, Union
from uuid import UUID

if TYPE_CHECKING:
    from .target import QueryTarget

# Values that can be used as a predicate operand as-is
Scalar = Union[str, bytes, int, float, bool, Decimal, date, datetime, time, UUID, Enum]
SCALAR_TYPES: Tuple[type, ...] = (str, bytes, int, float, bool, Decimal, date, datetime, time, UUID, Enum)

# Ordered sequences accepted as multi-valued parameters
SEQUENCE_TYPES: Tuple[type, ...] = (list, tuple)

# Raw input (e.g. decoded query string) and its sanitized form
ParameterBag = Mapping[str, Any]
FilteredParameterBag = Dict[str, Union[Scalar, List[Any], Tuple[Any, ...]]]

# Field declarations: ["name", ("name", "like")] or {"name": "like"}
FieldDeclaration = Union[Sequence[Union[str, Tuple[str, Any]]], Mapping[str, Any]]

# Custom rule: handler(target, value) -> None
Handler = Callable[["QueryTarget", Any], None]
