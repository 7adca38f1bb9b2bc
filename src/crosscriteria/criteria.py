"""Declarative criteria base class.

Subclass `Criteria` to describe which request parameters may filter a query
and how::

    class UserCriteria(Criteria):
        fields = ["status", ("name", "like"), "age", ("period", "custom")]

        def criteria_period(self, target, value):
            target.where("created_at", ">=", value)

    stmt = UserCriteria(params).apply(SelectBuilder(select(users))).statement

The declaration and the custom rule registry are compiled once, when the
subclass is created; a bad operator or a custom-only field without a rule
raises `ConfigurationError` at that point.
"""

from types import MappingProxyType
from typing import Any, Callable, ClassVar, Dict, Mapping, Optional, TypeVar

from .builders.base import QueryBuilder
from .declaration import CriteriaSpec
from .dispatcher import CustomRuleDispatcher
from .engine import CriteriaEngine
from .exceptions import MissingHandlerError
from .predicates import PredicateBuilder
from .sanitizer import ParameterSanitizer, is_usable_value
from .settings import settings
from .types import FieldDeclaration, FilteredParameterBag, ParameterBag
from .utils import freeze_params, handler_name, snake_case

__all__ = ("Criteria",)

B = TypeVar("B", bound=QueryBuilder)


class Criteria:
    """Base class for request-scoped criteria.

    Class attributes:
        fields: Field declaration, e.g. ``["status", ("name", "like")]``
        method_prefix: Prefix of custom rule methods (``criteria_<field>``)
        predicates: Optional `PredicateBuilder` overriding the settings defaults

    Override `keep_value` to replace the sanitization policy.
    """

    fields: ClassVar[Optional[FieldDeclaration]] = None
    method_prefix: ClassVar[str] = settings.CRITERIA_METHOD_PREFIX
    predicates: ClassVar[Optional[PredicateBuilder]] = None

    _spec: ClassVar[CriteriaSpec] = CriteriaSpec()
    _rules: ClassVar[Mapping[str, Callable[..., Any]]] = MappingProxyType({})

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._spec = CriteriaSpec.from_declaration(cls.fields)
        namespace: Dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            namespace.update(vars(klass))
        cls._rules = CustomRuleDispatcher.collect(namespace.items(), cls.method_prefix)
        for field in cls._spec.custom_fields():
            if snake_case(field) not in cls._rules:
                raise MissingHandlerError(
                    "Custom-only field has no rule",
                    criteria=cls.__name__,
                    field=field,
                    method=handler_name(cls.method_prefix, field),
                )

    def __init__(self, params: ParameterBag) -> None:
        if not isinstance(params, Mapping):
            raise TypeError(f"params must be a mapping, got {type(params).__name__}")
        self._original = freeze_params(params)
        handlers = {field: fn.__get__(self, type(self)) for field, fn in self._rules.items()}
        self._engine = CriteriaEngine(
            self._spec,
            dispatcher=CustomRuleDispatcher(handlers),
            sanitizer=ParameterSanitizer(self.keep_value),
            predicates=self.predicates,
        )
        self._params = self._engine.sanitize(self._original)

    @classmethod
    def spec(cls) -> CriteriaSpec:
        return cls._spec

    @classmethod
    def rule_fields(cls) -> tuple:
        """Field names (snake_case) that have a custom rule."""
        return tuple(cls._rules)

    @property
    def original(self) -> Mapping[str, Any]:
        """Read-only snapshot of the parameters as given."""
        return self._original

    @property
    def params(self) -> FilteredParameterBag:
        """Sanitized parameters."""
        return dict(self._params)

    def keep_value(self, value: Any) -> bool:
        return is_usable_value(value)

    def has(self, field: str) -> bool:
        return field in self._params

    def get(self, field: str, default: Any = None) -> Any:
        return self._params.get(field, default)

    def apply(self, builder: B) -> B:
        """Apply these criteria to ``builder`` and return it."""
        return self._engine.apply(self._original, builder)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} params={self._params!r}>"
