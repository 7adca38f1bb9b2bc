"""Generic predicate rules.

- exact/in: the value (scalar or sequence) becomes an ``IN`` list
- like: the value becomes a ``%value%`` pattern matched with LIKE/ILIKE

Only scalar elements of a sequence are used. A sequence given to a LIKE field
is reduced to its first scalar element and a `CoercionPolicyWarning` is
emitted. A value with no scalar left produces no predicate.
"""

import warnings
from typing import Any, List, Optional

from .constants import Operator
from .exceptions import CoercionPolicyWarning, InvalidOperatorError
from .logger import Logger
from .sanitizer import is_scalar, is_sequence
from .settings import settings
from .target import QueryTarget

__all__ = (
    "PredicateBuilder",
    "coerce_sequence",
    "coerce_scalar",
    "escape_like",
    "like_pattern",
)

logger = Logger(__name__)


def coerce_sequence(value: Any) -> List[Any]:
    """Wrap a bare scalar into a one-element list; keep the scalar elements of a sequence."""
    if is_sequence(value):
        return [item for item in value if is_scalar(item)]
    return [value] if is_scalar(value) else []


def coerce_scalar(value: Any, field: Optional[str] = None) -> Any:
    """Reduce a sequence to its first scalar element, warning about the coercion.

    Returns None when no scalar is available.
    """
    if not is_sequence(value):
        return value if is_scalar(value) else None
    first = next((item for item in value if is_scalar(item)), None)
    if first is None:
        return None
    warnings.warn(
        f"Field {field!r} expects a single value, got {len(value)} values; using the first one",
        CoercionPolicyWarning,
        stacklevel=3,
    )
    logger.warning("Coerced sequence value for field %r to %r", field, first)
    return first


def escape_like(value: str, escape: str = "\\") -> str:
    """Escape LIKE wildcards so the value matches literally."""
    return value.replace(escape, escape + escape).replace("%", escape + "%").replace("_", escape + "_")


def like_pattern(value: Any, escape: bool = True) -> str:
    text = value.decode("utf-8", "replace") if isinstance(value, bytes) else str(value)
    if escape:
        text = escape_like(text)
    return f"%{text}%"


class PredicateBuilder:
    """Apply the generic rule for a declared operator to a query target."""

    def __init__(self, escape_like: Optional[bool] = None, like_operator: Optional[str] = None) -> None:
        self.escape_like = settings.CRITERIA_ESCAPE_LIKE if escape_like is None else escape_like
        self.like_operator = like_operator or settings.CRITERIA_LIKE_OPERATOR

    def apply_generic(self, operator: str, field: str, value: Any, target: QueryTarget) -> None:
        """Add the predicate for ``field`` to ``target``.

        Raises:
            InvalidOperatorError: operator is not one of the `Operator` constants
        """
        if operator == Operator.EXACT_OR_IN:
            values = coerce_sequence(value)
            if not values:
                logger.debug("Skipping field %r: no scalar value in %r", field, value)
                return
            target.where_in(field, values)
        elif operator == Operator.LIKE:
            term = coerce_scalar(value, field)
            if term is None:
                logger.debug("Skipping field %r: no scalar value in %r", field, value)
                return
            target.where(field, self.like_operator, like_pattern(term, escape=self.escape_like))
        elif operator == Operator.CUSTOM:
            logger.debug("Field %r is custom-only and has no generic rule", field)
        else:
            raise InvalidOperatorError("Unknown operator", field=field, operator=operator)

    def __repr__(self) -> str:
        return f"<PredicateBuilder like_operator={self.like_operator!r} escape_like={self.escape_like!r}>"
