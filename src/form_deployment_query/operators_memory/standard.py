"""Equality operators: =, !=."""

from __future__ import annotations

from typing import Any

from ..operators import QueryOperator
from .base import MemoryOperator


class EqualOperator(MemoryOperator):
    @property
    def name(self) -> QueryOperator:
        return QueryOperator.EQ

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value == condition_value)


class NotEqualOperator(MemoryOperator):
    """SQL semantics: a missing value is neither equal nor unequal."""

    @property
    def name(self) -> QueryOperator:
        return QueryOperator.NE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return bool(field_value != condition_value)
