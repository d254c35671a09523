"""Immutable building blocks recorded by a :class:`DeploymentQuery`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .fields import DeploymentField, DeploymentOrderField, SortDirection
from .operators import QueryOperator


@dataclass(frozen=True)
class Predicate:
    """
    A single filter condition.

    Attributes:
        field: Which filter was requested.
        operator: Comparison implied by ``field``.
        value: The comparison value, ``None`` for ``is_null``.
    """

    field: DeploymentField
    operator: QueryOperator
    value: str | None = None

    @classmethod
    def of(cls, field: DeploymentField, value: str | None = None) -> Predicate:
        """Create a predicate using the operator implied by *field*."""
        return cls(field=field, operator=field.operator, value=value)

    @property
    def attribute(self) -> str:
        return self.field.attribute

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field.value,
            "op": self.operator.value,
            "val": self.value,
        }


@dataclass(frozen=True)
class OrderSpec:
    """A completed ``(field, direction)`` sort directive."""

    field: DeploymentOrderField
    direction: SortDirection

    @property
    def attribute(self) -> str:
        return self.field.attribute

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field.value, "direction": self.direction.value}
