"""Custom exception hierarchy for the WTII encounter tracker.

All exceptions inherit from WtiiError, enabling unified error handling at
the application boundary while preserving domain-specific context.

Roster index problems ("nothing selected", out-of-range rows) and stale
search results have no exception: they are ordinary states of an
interactive tracker and degrade to no-ops.

Example:
    >>> from wtii.core.exceptions import DataQualityError
    >>> raise DataQualityError("Creature has no hit points", field_name="hit_points")
"""

from __future__ import annotations

from typing import Any


class WtiiError(Exception):
    """Base exception for all WTII errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(WtiiError):
    """Raised when application configuration is invalid.

    This includes invalid values, conflicting key bindings, or settings
    that cannot be loaded from the environment.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


# =============================================================================
# Engine & Model Exceptions
# =============================================================================


class DiceRollError(WtiiError):
    """Raised when dice rolling operations fail.

    This typically occurs when parsing invalid dice notation or when an
    empty range is requested.
    """

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


class DataQualityError(WtiiError):
    """Raised when external data cannot produce a valid combatant.

    A creature record without hit points cannot satisfy the health/status
    coupling, so construction is refused instead of inventing a value.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize data quality error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the missing or invalid field.
            source: Name of the record the field was read from.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if source:
            combined_details["source"] = source
        super().__init__(message, details=combined_details)


# =============================================================================
# Creature Search Exceptions
# =============================================================================


class SearchError(WtiiError):
    """Base exception for creature database search failures."""

    def __init__(
        self,
        message: str,
        *,
        query: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize search error with query context.

        Args:
            message: Human-readable error description.
            query: The free-text query that was being searched.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if query is not None:
            combined_details["query"] = query
        super().__init__(message, details=combined_details)


class SearchRequestError(SearchError):
    """Raised when the request itself fails.

    Covers connection failures, timeouts and non-success HTTP statuses.
    """

    def __init__(
        self,
        message: str,
        *,
        query: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if status_code is not None:
            combined_details["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, query=query, details=combined_details)


class SearchResponseError(SearchError):
    """Raised when the response body is not the expected JSON envelope."""


class SearchParseError(SearchError):
    """Raised when search records fail schema validation."""


__all__ = [
    "WtiiError",
    "ConfigurationError",
    "DiceRollError",
    "DataQualityError",
    "SearchError",
    "SearchRequestError",
    "SearchResponseError",
    "SearchParseError",
]
