"""Criteria declarations.

A `CriteriaSpec` is the ordered, immutable list of filterable fields and the
operator each one uses. It is compiled once per criteria type from a loose
declaration:

- ``["status", ("name", "like")]`` (bare names default to exact/in)
- ``{"status": None, "name": "like"}``

Operators are validated here so a misconfigured criteria fails when it is
declared, not when it is applied.
"""

from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .constants import DEFAULT_OPERATOR, OPERATOR_MAP, Operator
from .exceptions import InvalidDeclarationError, InvalidOperatorError
from .types import FieldDeclaration

__all__ = (
    "FieldRule",
    "CriteriaSpec",
    "resolve_operator",
)


def resolve_operator(operator: Any, field: Optional[str] = None) -> str:
    """Map an operator name or alias to one of the `Operator` constants.

    Raises:
        InvalidOperatorError: if the operator is not supported
    """
    if operator is None:
        return DEFAULT_OPERATOR
    if isinstance(operator, str):
        resolved = OPERATOR_MAP.get(operator.strip().lower())
        if resolved is not None:
            return resolved
    raise InvalidOperatorError(
        f"Operator {operator!r} is not supported. Supported: {', '.join(sorted(set(OPERATOR_MAP.values())))}",
        field=field,
        operator=operator,
    )


class FieldRule(BaseModel):
    """A single filterable field and its operator."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Parameter / column name.")
    operator: str = Field(DEFAULT_OPERATOR, description="One of the Operator constants.")

    @field_validator("operator", mode="before")
    @classmethod
    def _check_operator(cls, value: Any, info: ValidationInfo) -> str:
        return resolve_operator(value, field=info.data.get("name"))

    @property
    def is_custom(self) -> bool:
        return self.operator == Operator.CUSTOM


class CriteriaSpec(BaseModel):
    """Ordered, immutable collection of `FieldRule` entries."""

    model_config = ConfigDict(frozen=True)

    rules: Tuple[FieldRule, ...] = ()

    @classmethod
    def from_declaration(cls, declaration: Optional[FieldDeclaration]) -> "CriteriaSpec":
        """Compile a loose field declaration.

        A field declared twice keeps its first position and its last operator.

        Raises:
            InvalidOperatorError: unknown operator
            InvalidDeclarationError: malformed declaration item
        """
        if declaration is None:
            return cls()
        if isinstance(declaration, str):
            raise InvalidDeclarationError(
                "Field declaration must be a sequence or mapping, not a string",
                declaration=declaration,
            )
        items = declaration.items() if isinstance(declaration, Mapping) else declaration
        ordered: Dict[str, str] = {}
        for item in items:
            name, operator = cls._split_item(item)
            ordered[name] = resolve_operator(operator, field=name)
        return cls(rules=tuple(FieldRule(name=name, operator=op) for name, op in ordered.items()))

    @staticmethod
    def _split_item(item: Any) -> Tuple[str, Any]:
        if isinstance(item, str):
            name, operator = item, None
        elif isinstance(item, (tuple, list)) and len(item) == 2 and isinstance(item[0], str):
            name, operator = item
        else:
            raise InvalidDeclarationError("Malformed field declaration", item=item)
        if not name.strip():
            raise InvalidDeclarationError("Field name must not be empty", item=item)
        return name, operator

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(rule.name for rule in self.rules)

    def get(self, name: str) -> Optional[FieldRule]:
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None

    def operator_for(self, name: str) -> Optional[str]:
        """Return the declared operator for a field, or None when it is not declared."""
        rule = self.get(name)
        return rule.operator if rule is not None else None

    def custom_fields(self) -> Tuple[str, ...]:
        return tuple(rule.name for rule in self.rules if rule.is_custom)

    def __contains__(self, name: object) -> bool:
        return any(rule.name == name for rule in self.rules)

    def __iter__(self) -> Iterator[FieldRule]:  # type: ignore[override]
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)
