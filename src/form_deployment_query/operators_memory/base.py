"""Strategy interface for in-memory operators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..operators import QueryOperator


class MemoryOperator(ABC):
    """Decides one :class:`QueryOperator` against a plain Python value."""

    @property
    @abstractmethod
    def name(self) -> QueryOperator: ...

    @abstractmethod
    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        """
        Args:
            field_value: A scalar read from the deployment. Collection
                attributes are passed one element at a time.
            condition_value: The value recorded on the predicate, ``None``
                for ``is_null``.
        """
        ...
