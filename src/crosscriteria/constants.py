"""
Operator constants shared by criteria declarations and the predicate builder.
"""


class Operator:
    EXACT_OR_IN = "exact_or_in"
    LIKE = "like"
    CUSTOM = "custom"


OPERATOR_MAP = {
    "exact_or_in": Operator.EXACT_OR_IN,
    "exact": Operator.EXACT_OR_IN,
    "eq": Operator.EXACT_OR_IN,
    "=": Operator.EXACT_OR_IN,
    "in": Operator.EXACT_OR_IN,
    "like": Operator.LIKE,
    "contains": Operator.LIKE,
    "custom": Operator.CUSTOM,
}

DEFAULT_OPERATOR = Operator.EXACT_OR_IN

# Pattern operators of the bundled query builders
LIKE_OPERATORS = {"like", "ilike", "not like", "not ilike"}
