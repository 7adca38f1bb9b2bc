"""
This __init__.py file makes the crosscriteria directory a Python package
and exposes the `Criteria` base class, the engine and the bundled query
builders for easy access.
"""

from .builders import QueryBuilder, SelectBuilder, SqlWhereBuilder
from .constants import Operator
from .criteria import Criteria
from .declaration import CriteriaSpec, FieldRule
from .dispatcher import CustomRuleDispatcher, rule
from .engine import CriteriaEngine
from .exceptions import CoercionPolicyWarning, ConfigurationError, CrossCriteriaError
from .predicates import PredicateBuilder
from .sanitizer import ParameterSanitizer
from .target import QueryTarget
from .utils import params_from_query_string

__version__ = "0.1.0"

__all__ = [
    "Criteria",
    "CriteriaEngine",
    "CriteriaSpec",
    "FieldRule",
    "Operator",
    "CustomRuleDispatcher",
    "rule",
    "PredicateBuilder",
    "ParameterSanitizer",
    "QueryTarget",
    "QueryBuilder",
    "SelectBuilder",
    "SqlWhereBuilder",
    "CrossCriteriaError",
    "ConfigurationError",
    "CoercionPolicyWarning",
    "params_from_query_string",
]
