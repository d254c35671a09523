"""
Deployment query exception hierarchy.

All exceptions inherit from ``QueryError`` and provide ``to_dict()``
for API-friendly error responses.  Builder-level errors signal misuse of
the fluent contract and are raised at the offending call.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class QueryError(Exception):
    """Base exception for all deployment query errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class InvalidQueryStateError(QueryError):
    """A builder method was called in a state that forbids it."""

    def __init__(self, message: str, state: str | None = None) -> None:
        self.message = message
        self.state = state
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_QUERY_STATE",
            "message": self.message,
            "state": self.state,
        }


class IncompleteQueryError(QueryError):
    """A terminal method was called while an order-by field awaits a direction."""

    def __init__(self, pending_field: str) -> None:
        self.pending_field = pending_field
        super().__init__(
            f"Cannot execute query: order by '{pending_field}' "
            f"must be followed by asc() or desc()"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INCOMPLETE_QUERY",
            "message": str(self),
            "pending_field": self.pending_field,
        }


class NonUniqueResultError(QueryError):
    """``single_result()`` matched more than one deployment."""

    def __init__(self, message: str = "Query returned more than one result") -> None:
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "NON_UNIQUE_RESULT",
            "message": str(self),
        }


class InvalidArgumentError(QueryError, ValueError):
    """A method received a missing or out-of-range argument."""

    def __init__(self, argument: str, message: str) -> None:
        self.argument = argument
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_ARGUMENT",
            "argument": self.argument,
            "message": self.message,
        }


class UnknownFieldError(QueryError):
    """
    Unknown field name in serialised criteria.

    Provides fuzzy-matched suggestions for likely intended fields.
    """

    def __init__(self, field: str, valid_fields: list[str]) -> None:
        self.field = field
        self.valid_fields = valid_fields
        self.suggestions = get_close_matches(field, valid_fields, n=3, cutoff=0.6)

        message = f"Unknown field: '{field}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNKNOWN_FIELD",
            "field": self.field,
            "suggestions": self.suggestions,
            "valid_fields": sorted(self.valid_fields),
        }
