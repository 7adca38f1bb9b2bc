"""Utility functions for crosscriteria.

Shared helpers for field-name normalization and parameter decoding.
"""

import re
from types import MappingProxyType
from typing import Any, Dict, Mapping
from urllib.parse import parse_qsl

from .types import ParameterBag

_NON_IDENTIFIER = re.compile(r"[^0-9a-zA-Z]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def snake_case(name: str) -> str:
    """Normalize a field name to snake_case.

    Examples:
        >>> snake_case("userName")
        'user_name'
        >>> snake_case("created-at")
        'created_at'
        >>> snake_case("UserID")
        'user_id'
    """
    name = _NON_IDENTIFIER.sub("_", name.strip())
    name = _CAMEL_BOUNDARY.sub("_", name)
    return name.strip("_").lower()


def handler_name(prefix: str, field: str) -> str:
    """Return the handler method name for a field, e.g. ``criteria_user_name``."""
    prefix = prefix.rstrip("_")
    if not prefix:
        return snake_case(field)
    return f"{prefix}_{snake_case(field)}"


def freeze_params(params: ParameterBag) -> Mapping[str, Any]:
    """Return a read-only shallow copy of a parameter bag."""
    return MappingProxyType(dict(params))


def params_from_query_string(query_string: str) -> Dict[str, Any]:
    """Decode a URL query string into a parameter bag.

    - ``key[]=a&key[]=b`` always produces a list
    - repeated plain keys (``key=a&key=b``) produce a list
    - a single plain key stays a scalar string
    - blank values are kept as ``""``

    Key order follows first occurrence in the query string.
    """
    query_string = query_string.lstrip("?")
    params: Dict[str, Any] = {}
    for raw_key, value in parse_qsl(query_string, keep_blank_values=True):
        if raw_key.endswith("[]"):
            key = raw_key[:-2]
            current = params.get(key)
            if isinstance(current, list):
                current.append(value)
            elif key in params:
                params[key] = [current, value]
            else:
                params[key] = [value]
            continue
        if raw_key in params:
            current = params[raw_key]
            if isinstance(current, list):
                current.append(value)
            else:
                params[raw_key] = [current, value]
        else:
            params[raw_key] = value
    return params
