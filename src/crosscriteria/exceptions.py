"""Custom exceptions for CrossCriteria library.

This module defines the exceptions raised while declaring criteria and the
warning emitted when a parameter value has to be coerced.
"""

from typing import Any, Dict


# Base exception
class CrossCriteriaError(Exception):
    """Base exception for all CrossCriteria errors.

    Attributes:
        message: Error message
        details: Additional error context as key-value pairs
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        """Initialize exception with message and additional details.

        Args:
            message: Human-readable error message
            **kwargs: Additional context (e.g., field, operator, criteria)
        """
        self.message = message
        self.details: Dict[str, Any] = kwargs
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the complete error message with details."""
        if not self.details:
            return self.message

        details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        if self.message:
            return f"{self.message} ({details_str})"
        return details_str

    def __repr__(self) -> str:
        """Return detailed representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# Configuration exceptions
class ConfigurationError(CrossCriteriaError):
    """Raised when a criteria declaration is invalid.

    Example:
        >>> raise ConfigurationError("Invalid criteria", criteria="UserCriteria")
    """


class InvalidOperatorError(ConfigurationError):
    """Raised when a field is declared with an operator outside the supported set.

    Example:
        >>> raise InvalidOperatorError("Unknown operator", field="age", operator="between")
    """


class InvalidDeclarationError(ConfigurationError):
    """Raised when a field declaration item cannot be understood.

    Example:
        >>> raise InvalidDeclarationError("Malformed field declaration", item=("a", "like", 1))
    """


class MissingHandlerError(ConfigurationError):
    """Raised when a field is declared custom-only but no handler exists for it.

    Example:
        >>> raise MissingHandlerError("No handler for custom field", field="period", method="criteria_period")
    """


# Warnings
class CoercionPolicyWarning(UserWarning):
    """Emitted when a value is coerced to fit its operator (e.g. a list given to a LIKE field)."""
