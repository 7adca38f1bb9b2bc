"""Custom rule dispatch.

Custom rules replace generic predicate generation for a single field. They
are collected once per criteria type into a read-only registry keyed by the
snake_case field name, from two sources:

- methods named ``<prefix>_<field>`` (``criteria_status`` for ``status``)
- methods decorated with ``@rule("field")``

Dispatch is a plain dictionary lookup; nothing is resolved by name at
apply time.
"""

import inspect
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Mapping, Tuple

from .target import QueryTarget
from .types import Handler
from .utils import snake_case

__all__ = (
    "CustomRuleDispatcher",
    "rule",
    "RULE_FIELDS_ATTR",
)

RULE_FIELDS_ATTR = "__criteria_fields__"


def rule(*fields: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Mark a method as the custom rule for one or more fields.

    Example:
        >>> class OrderCriteria(Criteria):
        ...     fields = ["created-at"]
        ...
        ...     @rule("created-at")
        ...     def created_since(self, target, value):
        ...         target.where("created_at", ">=", value)
    """
    if not fields:
        raise TypeError("rule() requires at least one field name")

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        existing: Tuple[str, ...] = getattr(fn, RULE_FIELDS_ATTR, ())
        setattr(fn, RULE_FIELDS_ATTR, existing + tuple(fields))
        return fn

    return decorator


class CustomRuleDispatcher:
    """Look up and invoke per-field custom rules."""

    def __init__(self, handlers: Mapping[str, Handler]) -> None:
        self._handlers: Mapping[str, Handler] = MappingProxyType({snake_case(k): v for k, v in handlers.items()})

    @staticmethod
    def collect(namespace: Iterable[Tuple[str, Any]], prefix: str) -> Mapping[str, Callable[..., Any]]:
        """Build a read-only ``field -> function`` registry from class attributes.

        Decorated methods win over prefix-named ones for the same field.

        Args:
            namespace: ``(attribute name, value)`` pairs, e.g. ``vars(cls).items()``
            prefix: handler method prefix, without trailing underscore
        """
        by_prefix: Dict[str, Callable[..., Any]] = {}
        by_decorator: Dict[str, Callable[..., Any]] = {}
        marker = f"{prefix.rstrip('_')}_" if prefix.rstrip("_") else ""
        for attr, value in namespace:
            if not inspect.isfunction(value):
                continue
            for field in getattr(value, RULE_FIELDS_ATTR, ()):
                by_decorator[snake_case(field)] = value
            if marker and attr.startswith(marker) and len(attr) > len(marker):
                by_prefix[snake_case(attr[len(marker) :])] = value
        by_prefix.update(by_decorator)
        return MappingProxyType(by_prefix)

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(self._handlers)

    def handles(self, field: str) -> bool:
        return snake_case(field) in self._handlers

    def try_dispatch(self, field: str, value: Any, target: QueryTarget) -> bool:
        """Invoke the custom rule for ``field`` if one exists.

        Returns:
            True when a rule handled the field, False otherwise (no mutation).
        """
        handler = self._handlers.get(snake_case(field))
        if handler is None:
            return False
        handler(target, value)
        return True

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"<CustomRuleDispatcher fields={list(self._handlers)!r}>"


empty_dispatcher = CustomRuleDispatcher({})
