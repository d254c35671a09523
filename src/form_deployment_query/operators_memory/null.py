"""Null checks."""

from __future__ import annotations

from typing import Any

from ..operators import QueryOperator
from .base import MemoryOperator


class IsNullOperator(MemoryOperator):
    @property
    def name(self) -> QueryOperator:
        return QueryOperator.IS_NULL

    def evaluate(self, field_value: Any, _condition_value: Any) -> bool:
        return field_value is None


class AbsentOperator(IsNullOperator):
    """True for ``None`` and ``""``."""

    def evaluate(self, field_value: Any, _condition_value: Any) -> bool:
        return field_value is None or field_value == ""
