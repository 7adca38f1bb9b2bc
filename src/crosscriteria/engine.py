"""
Criteria engine.

This module provides the `CriteriaEngine`, which turns a parameter bag into
predicates on a query builder:

1. sanitize the bag
2. resolve the builder's table once
3. for each remaining parameter, in the bag's own order:
   a. run the field's custom rule, if any
   b. otherwise apply the generic rule when the field is declared
   c. otherwise ignore the parameter
"""

from typing import Optional, TypeVar

from .builders.base import QueryBuilder
from .declaration import CriteriaSpec
from .dispatcher import CustomRuleDispatcher, empty_dispatcher
from .exceptions import MissingHandlerError
from .logger import Logger
from .predicates import PredicateBuilder
from .sanitizer import ParameterSanitizer, default_sanitizer
from .target import QueryTarget
from .types import FilteredParameterBag, ParameterBag

__all__ = ("CriteriaEngine",)

B = TypeVar("B", bound=QueryBuilder)


class CriteriaEngine:
    """Orchestrates sanitization, custom dispatch and generic predicates.

    The engine holds only immutable configuration; it keeps no reference to
    parameters or builders between calls and can be shared freely.

    Attributes:
        spec: Declared fields and their operators
        dispatcher: Custom rules, consulted before the generic rules
        sanitizer: Filters the raw parameter bag
        predicates: Applies generic rules
    """

    def __init__(
        self,
        spec: CriteriaSpec,
        dispatcher: Optional[CustomRuleDispatcher] = None,
        sanitizer: Optional[ParameterSanitizer] = None,
        predicates: Optional[PredicateBuilder] = None,
    ) -> None:
        self.spec = spec
        self.dispatcher = dispatcher or empty_dispatcher
        self.sanitizer = sanitizer or default_sanitizer
        self.predicates = predicates or PredicateBuilder()
        for field in spec.custom_fields():
            if not self.dispatcher.handles(field):
                raise MissingHandlerError("Custom-only field has no rule", field=field)
        self.logger = Logger(self.__class__.__name__)

    def sanitize(self, params: ParameterBag) -> FilteredParameterBag:
        return self.sanitizer.sanitize(params)

    def apply(self, params: ParameterBag, builder: B) -> B:
        """Apply criteria for ``params`` to ``builder`` and return it.

        Unknown parameters are ignored. Errors raised by the builder or by a
        custom rule propagate unchanged.
        """
        filtered = self.sanitize(params)
        target = QueryTarget(builder)
        applied = ignored = 0
        for field, value in filtered.items():
            if self.dispatcher.try_dispatch(field, value, target):
                applied += 1
                continue
            operator = self.spec.operator_for(field)
            if operator is None:
                self.logger.debug("Ignoring undeclared parameter %r", field)
                ignored += 1
                continue
            self.predicates.apply_generic(operator, field, value, target)
            applied += 1
        self.logger.message(
            "Criteria applied: table=%s applied=%d ignored=%d dropped=%d",
            target.table,
            applied,
            ignored,
            len(params) - len(filtered),
        )
        return builder

    def __repr__(self) -> str:
        return f"<CriteriaEngine fields={list(self.spec.field_names)!r} custom={list(self.dispatcher.fields)!r}>"
