"""Parameter sanitization.

Removes parameter values that cannot produce a predicate before the criteria
engine sees them:

- ``None``
- opaque values (mappings, sets, arbitrary objects)
- empty sequences

Falsy scalars such as ``0``, ``False`` and ``""`` are kept.
"""

from typing import Any, Callable, Optional

from .types import SCALAR_TYPES, SEQUENCE_TYPES, FilteredParameterBag, ParameterBag

__all__ = (
    "ParameterSanitizer",
    "is_scalar",
    "is_sequence",
    "is_opaque",
    "is_usable_value",
)


def is_scalar(value: Any) -> bool:
    return isinstance(value, SCALAR_TYPES)


def is_sequence(value: Any) -> bool:
    return isinstance(value, SEQUENCE_TYPES)


def is_opaque(value: Any) -> bool:
    """Whether a non-null value is neither a scalar nor an ordered sequence."""
    return value is not None and not is_scalar(value) and not is_sequence(value)


def is_usable_value(value: Any) -> bool:
    """Default sanitization predicate."""
    if value is None or is_opaque(value):
        return False
    if is_sequence(value):
        return len(value) > 0
    return True


class ParameterSanitizer:
    """Filter a parameter bag down to values usable as predicate operands.

    The keep-predicate can be replaced as a whole; it receives the raw value
    and returns whether the entry survives.
    """

    def __init__(self, keep: Optional[Callable[[Any], bool]] = None) -> None:
        self.keep = keep or is_usable_value

    def sanitize(self, params: ParameterBag) -> FilteredParameterBag:
        """Return a new dict with disqualified entries removed; the input is untouched."""
        return {field: value for field, value in params.items() if self.keep(value)}

    def __repr__(self) -> str:
        return f"<ParameterSanitizer keep={getattr(self.keep, '__name__', self.keep)!r}>"


default_sanitizer = ParameterSanitizer()
